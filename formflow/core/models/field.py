# =============================================================================
# formflow/core/models/field.py - Field Definition Schemas
# =============================================================================
# A fields directory holds JSON files mapping field name to definition:
#
#   {
#       "email": {"mixin": "input-text", "validate": ["required", "email"]},
#       "age": {"validate": ["numeric", "maxlength:3"]}
#   }
#
# Validators are strings of the form "name" or "name:argument" and are
# checked when the file is loaded.
# =============================================================================

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

LENGTH_VALIDATORS = {"minlength", "maxlength"}
VALIDATORS = {"required", "email", "numeric", "regex", *LENGTH_VALIDATORS}

# Mixins whose inputs share one name and submit every selected value
MULTI_VALUE_MIXINS = {"checkbox-group", "select-multiple"}


class FieldDefinition(BaseModel):
    """
    One form field. Unknown keys are kept and passed to the template.
    """

    model_config = ConfigDict(extra="allow")

    mixin: str = Field(
        default="input-text",
        description="Widget hint for templates (input-text, textarea, radio-group, ...)"
    )

    label: str | None = Field(
        default=None,
        description="Label text or translation key"
    )

    validate_: list[str] = Field(
        default_factory=list,
        alias="validate",
        description="Validator names, optionally with an argument (maxlength:10)"
    )

    options: list[Any] = Field(
        default_factory=list,
        description="Choices for radio/checkbox/select mixins"
    )

    @field_validator("validate_", mode="before")
    @classmethod
    def single_validator_to_list(cls, value: Any) -> Any:
        """Accept "required" as shorthand for ["required"]."""
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("validate_")
    @classmethod
    def validators_are_known(cls, value: list[str]) -> list[str]:
        """Reject unknown names and bad arguments before any request runs."""
        for validator in value:
            name, _, arg = validator.partition(":")
            if name not in VALIDATORS:
                raise ValueError(f"Unknown validator {name!r} (expected one of {sorted(VALIDATORS)})")
            if name in LENGTH_VALIDATORS:
                if not arg.isdigit():
                    raise ValueError(f"{name} needs a whole number argument, got {arg!r}")
            elif name == "regex":
                try:
                    re.compile(arg)
                except re.error as e:
                    raise ValueError(f"Invalid regex {arg!r}: {e}") from e
        return value

    @property
    def validators(self) -> list[str]:
        return self.validate_

    @property
    def multiple(self) -> bool:
        """Whether the field submits a list of values."""
        return self.mixin in MULTI_VALUE_MIXINS
