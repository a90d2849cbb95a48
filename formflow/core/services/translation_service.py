# =============================================================================
# formflow/core/services/translation_service.py - Translations
# =============================================================================
# Merges <translations>/<lang>/*.json into one nested dict per language and
# looks keys up with dotted paths:
#
#   translations/en/default.json  {"pages": {"cookies": {"header": "Cookies"}}}
#   t("pages.cookies.header")  ->  "Cookies"
#
# A missing translations directory is not an error: t() returns the key.
# =============================================================================

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


def _deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value
    return target


class Translator:
    """Dotted-key lookup over a nested translations dict."""

    def __init__(self, resources: dict[str, Any] | None = None):
        self.resources = resources or {}

    def __call__(self, key: str, default: str | None = None, **values: Any) -> str:
        node: Any = self.resources
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                node = None
                break
            node = node[part]

        if not isinstance(node, str):
            node = default if default is not None else key
        return node.format(**values) if values else node


class TranslationService:

    @staticmethod
    def load(directories: list[str], language: str = DEFAULT_LANGUAGE) -> Translator:
        """
        Load one language from several translation directories.

        Args:
            directories: Later directories override earlier ones
            language: Subdirectory name, e.g. "en"
        """
        resources: dict[str, Any] = {}
        for directory in directories:
            lang_dir = os.path.join(directory, language)
            if not os.path.isdir(lang_dir):
                continue
            for name in sorted(os.listdir(lang_dir)):
                if not name.endswith(".json"):
                    continue
                with open(os.path.join(lang_dir, name), encoding="utf-8") as f:
                    _deep_merge(resources, json.load(f))

        logger.debug(f"Loaded translations ({language}) from {directories}")
        return Translator(resources)
