"""Concrete compiler backend implementations."""

from .python_backend import PythonBackend

__all__ = ["PythonBackend"]
