"""Environment variable readers for dynfunc."""

import os


def _get_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_dynfunc_log_level() -> str:
    """Get the log level from the DYNFUNC_LOG_LEVEL environment variable.

    Returns
    -------
    str
        The upper-cased level name. Default is "WARNING".
    """
    return os.environ.get("DYNFUNC_LOG_LEVEL", "WARNING").upper()


def get_dynfunc_warnings_as_errors() -> bool:
    """Whether compiler warnings are escalated to errors. Reads DYNFUNC_WARNINGS_AS_ERRORS,
    default False."""
    return _get_bool("DYNFUNC_WARNINGS_AS_ERRORS", False)


def get_dynfunc_register_modules() -> bool:
    """Whether compiled units are registered in ``sys.modules``. Reads
    DYNFUNC_REGISTER_MODULES, default True."""
    return _get_bool("DYNFUNC_REGISTER_MODULES", True)
