# =============================================================================
# formflow/core/services/__init__.py - Service Layer Exports
# =============================================================================

from .config_service import ConfigService
from .field_service import FieldService
from .translation_service import TranslationService, Translator

__all__ = [
    "ConfigService",
    "FieldService",
    "TranslationService",
    "Translator",
]
