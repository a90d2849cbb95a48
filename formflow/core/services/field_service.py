# =============================================================================
# formflow/core/services/field_service.py - Field Definitions
# =============================================================================
# Loads field definitions from a fields directory (every *.json file, merged
# in name order) or a single .json file, and validates submitted values
# against each field's validators.
# =============================================================================

import json
import logging
import os
import re
from typing import Any

from pydantic import ValidationError

from formflow.core.models import FieldDefinition
from formflow.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FieldService:
    """
    Field loading and validation.

    Validators:
        required, email, numeric, minlength:N, maxlength:N, regex:PATTERN
    """

    @staticmethod
    def load_dir(path: str) -> dict[str, FieldDefinition]:
        """
        Load every field definition under path.

        Args:
            path: A directory of *.json files, or a single .json file

        Returns:
            Field name -> FieldDefinition. Later files override earlier ones.

        Raises:
            InvalidConfigError: If a file is not a JSON object of valid
                definitions (the message names the file)
        """
        if os.path.isfile(path):
            files = [path]
        else:
            files = sorted(
                os.path.join(path, name)
                for name in os.listdir(path)
                if name.endswith(".json")
            )

        fields: dict[str, FieldDefinition] = {}
        for file_path in files:
            with open(file_path, encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise InvalidConfigError(f"{file_path} is not valid JSON: {e}") from e

            if not isinstance(data, dict):
                raise InvalidConfigError(f"{file_path} must map field names to definitions")

            for name, definition in data.items():
                try:
                    fields[name] = FieldDefinition.model_validate(definition or {})
                except ValidationError as e:
                    raise InvalidConfigError(f"field \"{name}\" in {file_path}: {e}") from e

        logger.debug(f"Loaded {len(fields)} fields from {path}")
        return fields

    @staticmethod
    def load(dirs: list[str]) -> dict[str, FieldDefinition]:
        """
        Merge fields from several directories.

        Args:
            dirs: Directories in precedence order (first wins)
        """
        fields: dict[str, FieldDefinition] = {}
        for path in reversed(dirs):
            fields.update(FieldService.load_dir(path))
        return fields

    @staticmethod
    def validate_value(value: str | list[str], validators: list[str]) -> str | None:
        """
        Run validators against a submitted value.

        A list (from a multi-valued field) is required when it has at least
        one non-blank item; every other validator runs on each item. Empty
        optional values skip every validator but "required".

        Returns:
            The name of the first failing validator, or None if valid
        """
        raw = value if isinstance(value, (list, tuple)) else [value]
        items = [item.strip() for item in raw if item and item.strip()]

        for validator in validators:
            name, _, arg = validator.partition(":")

            if name == "required":
                if not items:
                    return name
                continue

            for item in items:
                if not FieldService._check(name, arg, item):
                    return name

        return None

    @staticmethod
    def _check(name: str, arg: str, value: str) -> bool:
        if name == "email":
            return bool(_EMAIL_RE.match(value))
        if name == "numeric":
            return bool(re.fullmatch(r"-?\d+(\.\d+)?", value))
        if name == "minlength":
            return len(value) >= int(arg)
        if name == "maxlength":
            return len(value) <= int(arg)
        if name == "regex":
            return bool(re.fullmatch(arg, value))
        return True

    @staticmethod
    def validate(
        values: dict[str, Any],
        fields: dict[str, FieldDefinition],
        names: list[str],
    ) -> dict[str, str]:
        """
        Validate the fields of one step.

        Args:
            values: Submitted form values
            fields: All known field definitions
            names: The step's field names

        Returns:
            Field name -> failing validator name (empty when valid)
        """
        errors = {}
        for name in names:
            definition = fields.get(name)
            if definition is None:
                continue
            failed = FieldService.validate_value(values.get(name, ""), definition.validators)
            if failed:
                errors[name] = failed
        return errors
