# =============================================================================
# formflow/defaults.py - Default Bootstrap Options
# =============================================================================
# The defaults bootstrap() merges the caller's options into. Directory
# options are relative to "caller": the directory of the module that called
# bootstrap(), so a service can keep views/ and fields/ next to its entry
# module without spelling out absolute paths.
# =============================================================================

import inspect
import os
from typing import Any

from formflow.config import get_settings
from formflow.controllers import BaseController

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def find_caller() -> str:
    """
    Directory of the first stack frame outside the formflow package.

    Falls back to the working directory (interactive sessions, -c scripts).
    """
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if not filename.startswith("<"):
                path = os.path.abspath(filename)
                if not path.startswith(_PACKAGE_DIR + os.sep):
                    return os.path.dirname(path)
            frame = frame.f_back
    finally:
        del frame
    return os.getcwd()


def get_defaults(caller: str | None = None) -> dict[str, Any]:
    """
    Build the default options from Settings.

    Args:
        caller: Base directory for relative paths (detected when omitted)

    Returns:
        A fresh dict; callers may mutate it
    """
    settings = get_settings()

    return {
        "asset_path": "public",
        "translations": "translations",
        "views": "views",
        "fields": "fields",
        "caller": caller or find_caller(),
        "start": True,
        "get_cookies": True,
        "get_terms": True,
        "view_engine": "html",
        "base_controller": BaseController,
        "protocol": settings.PROTOCOL,
        "host": settings.HOST,
        "port": settings.PORT,
        "env": settings.NODE_ENV,
        "redis": {
            "host": settings.REDIS_HOST,
            "port": settings.REDIS_PORT,
        },
        "session": {
            "ttl": settings.SESSION_TTL,
            "secret": settings.SESSION_SECRET,
            "name": settings.SESSION_NAME,
        },
    }
