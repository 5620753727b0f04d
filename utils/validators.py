"""
Input Validators
Validate and sanitize user input
"""

import re
from typing import Optional
from datetime import date


class InputValidator:
    """
    Validate various input types
    """

    @staticmethod
    def validate_email(email: str) -> bool:
        """
        Validate email format

        Args:
            email: Email address

        Returns:
            True if valid
        """
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email or ""))

    @staticmethod
    def validate_password(password: str) -> tuple[bool, Optional[str]]:
        """
        Validate password strength

        Args:
            password: Password to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        # server-only policy; the client imports this module without server config
        from config import settings

        password = password or ""

        if len(password) < settings.MIN_PASSWORD_LENGTH:
            return False, f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"

        if settings.REQUIRE_PASSWORD_UPPERCASE and not re.search(r'[A-Z]', password):
            return False, "Password must contain at least one uppercase letter"

        if settings.REQUIRE_PASSWORD_LOWERCASE and not re.search(r'[a-z]', password):
            return False, "Password must contain at least one lowercase letter"

        if settings.REQUIRE_PASSWORD_DIGIT and not re.search(r'\d', password):
            return False, "Password must contain at least one digit"

        if settings.REQUIRE_PASSWORD_SPECIAL and not re.search(r'[!@#$%^&*(),.?":{}|<>]', password):
            return False, "Password must contain at least one special character"

        return True, None

    @staticmethod
    def sanitize_string(text: Optional[str], max_length: int = 1000) -> str:
        """
        Sanitize string input

        Args:
            text: Input text
            max_length: Maximum allowed length

        Returns:
            Sanitized string
        """
        if not text:
            return ""

        # Remove null bytes
        text = text.replace('\x00', '')

        # Trim to max length
        text = text[:max_length]

        # Strip leading/trailing whitespace
        text = text.strip()

        return text

    @staticmethod
    def validate_url(url: str) -> bool:
        """
        Validate URL format

        Args:
            url: URL string

        Returns:
            True if valid URL
        """
        pattern = r'^https?://[^\s/$.?#].[^\s]*$'
        return bool(re.match(pattern, url, re.IGNORECASE))

    @staticmethod
    def validate_date_range(start: Optional[date], end: Optional[date]) -> bool:
        """True unless both dates are set and end precedes start"""
        if start is None or end is None:
            return True
        return end >= start

    @staticmethod
    def missing_fields(data: dict, required_fields: list) -> list:
        """
        Required fields that are absent or blank

        Args:
            data: Input dict
            required_fields: Field names that must be non-empty

        Returns:
            Names of missing fields, in the order given
        """
        missing = []
        for field in required_fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        return missing


# Global instance
input_validator = InputValidator()


# Convenience functions
def validate_email(email: str) -> bool:
    """Validate email format"""
    return input_validator.validate_email(email)


def validate_password(password: str) -> tuple[bool, Optional[str]]:
    """Validate password strength"""
    return input_validator.validate_password(password)


def sanitize_string(text: Optional[str], max_length: int = 1000) -> str:
    """Sanitize string input"""
    return input_validator.sanitize_string(text, max_length)


def validate_url(url: str) -> bool:
    """Validate URL format"""
    return input_validator.validate_url(url)


def validate_date_range(start: Optional[date], end: Optional[date]) -> bool:
    """Validate date ordering"""
    return input_validator.validate_date_range(start, end)


def missing_fields(data: dict, required_fields: list) -> list:
    """Find blank required fields"""
    return input_validator.missing_fields(data, required_fields)
