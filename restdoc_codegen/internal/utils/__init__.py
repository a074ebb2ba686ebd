"""Утилиты для генератора"""

from .case_utils import (
    RESERVED_FIELD_NAMES,
    RESERVED_PARAMETER_NAMES,
    kebab_case,
    lower_camel_case,
    sanitize_identifier,
    snake_case,
    upper_camel_case,
)
from .doc_utils import flatten_text, format_doc_comment

__all__ = [
    "RESERVED_FIELD_NAMES",
    "RESERVED_PARAMETER_NAMES",
    "kebab_case",
    "lower_camel_case",
    "sanitize_identifier",
    "snake_case",
    "upper_camel_case",
    "flatten_text",
    "format_doc_comment",
]
