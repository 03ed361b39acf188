import hashlib
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

NonEmptyString = Annotated[str, StringConstraints(min_length=1)]
"""Type alias for non-empty strings with minimum length of 1."""


class BaseModelWithDocstrings(BaseModel):
    """Base model with the attribute docstrings being extracted to the model JSON schema."""

    model_config = ConfigDict(use_attribute_docstrings=True)


def hash_source(source: str) -> str:
    """Return the hex SHA-256 digest of a snippet's text."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()
