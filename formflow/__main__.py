# =============================================================================
# formflow/__main__.py - Command Line Entry Point
# =============================================================================
# Boots a service from a JSON config file and serves it with uvicorn.
#
# Usage:
#   python -m formflow service.json
#   python -m formflow service.json --port 9000
#   python -m formflow service.json --no-start   # validate only
#
# Relative paths inside the config resolve against the config file's
# directory. Controllers are given as "package.module:ClassName".
# =============================================================================

import argparse
import importlib
import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from formflow import bootstrap  # noqa: E402
from formflow.config import get_settings  # noqa: E402
from formflow.exceptions import BootstrapError  # noqa: E402

logger = logging.getLogger("formflow")


def import_string(path: str) -> Any:
    """
    Import "package.module:Name" (or "package.module.Name").

    Raises:
        ImportError: If the module or attribute does not exist
    """
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ImportError(f"{module_name} has no attribute {attr}") from e


def load_config(path: str) -> dict[str, Any]:
    """
    Read a JSON config file and resolve controller import strings.
    """
    with open(path, encoding="utf-8") as f:
        config = json.load(f)

    config.setdefault("caller", os.path.dirname(os.path.abspath(path)))

    if isinstance(config.get("baseController"), str):
        config["baseController"] = import_string(config["baseController"])

    for route in config.get("routes") or []:
        for step in (route.get("steps") or {}).values():
            if isinstance(step, dict) and isinstance(step.get("controller"), str):
                step["controller"] = import_string(step["controller"])

    return config


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="formflow", description="Serve a multi-step form service")
    parser.add_argument("config", help="Path to the JSON service config")
    parser.add_argument("--host", help="Override HOST")
    parser.add_argument("--port", type=int, help="Override PORT")
    parser.add_argument("--no-start", action="store_true", help="Validate and exit")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # sys.path must see the service's own modules for controller imports
    sys.path.insert(0, os.path.dirname(os.path.abspath(args.config)))

    try:
        app = bootstrap(load_config(args.config))
    except BootstrapError as e:
        logger.error(e.message)
        if e.suggestion:
            logger.error(f"Suggestion: {e.suggestion}")
        return 1

    if args.no_start or not app.options.start:
        logger.info("Configuration is valid")
        return 0

    app.listen(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
