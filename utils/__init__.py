"""
Utilities Module
Validators, helpers, common utilities
"""

from .validators import (
    input_validator,
    validate_email,
    validate_password,
    sanitize_string,
    validate_url,
    validate_date_range,
    missing_fields
)
from .helpers import (
    helpers,
    utc_now,
    normalize_email,
    calculate_percentage,
    count_by
)

__all__ = [
    "input_validator",
    "validate_email",
    "validate_password",
    "sanitize_string",
    "validate_url",
    "validate_date_range",
    "missing_fields",
    "helpers",
    "utc_now",
    "normalize_email",
    "calculate_percentage",
    "count_by"
]
