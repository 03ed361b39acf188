"""Utility functions for compiling snippets."""

from __future__ import annotations

import itertools
import re

from dynfunc.data import hash_source

_unit_counter = itertools.count()


def create_unit_name(source: str, prefix: str = "") -> str:
    """Generate a unique module name for a compiled snippet.

    The name is constructed from three parts:
    1. A prefix (typically identifying the compiler)
    2. A 12-character hash of the snippet text
    3. A process-wide sequence number, so compiling the same text twice yields two units

    Parameters
    ----------
    source : str
        The snippet text.
    prefix : str, optional
        The prefix to prepend to the name. Default is empty string.

    Returns
    -------
    str
        A valid Python identifier in the format: {prefix}{hash}_{sequence}.

    Examples
    --------
    >>> name = create_unit_name("def f() -> int:\\n    return 1\\n", "dynfunc_snippet_")
    >>> name.startswith("dynfunc_snippet_") and name.isidentifier()
    True
    """
    prefix = re.sub(r"[^0-9a-zA-Z_]", "_", prefix)
    name = f"{prefix}{hash_source(source)[:12]}_{next(_unit_counter)}"
    if name[0].isdigit():
        name = "_" + name
    return name


def unit_filename(unit_name: str) -> str:
    """The pseudo filename compiled code objects and tracebacks report for a unit."""
    return f"<dynfunc:{unit_name}>"
