"""
Helper Utilities
Common utility functions used across the application
"""

from typing import Dict, Iterable, Optional
from datetime import datetime, timezone


class Helpers:
    """
    Collection of utility functions
    """

    @staticmethod
    def utc_now() -> datetime:
        """Current time as an aware UTC datetime"""
        return datetime.now(timezone.utc)

    @staticmethod
    def normalize_email(email: Optional[str]) -> str:
        """
        Canonical form used for lookups and uniqueness checks

        Args:
            email: Raw email input

        Returns:
            Lower-cased, trimmed email ("" for None)
        """
        return (email or "").strip().lower()

    @staticmethod
    def calculate_percentage(part: float, total: float, decimals: int = 1) -> float:
        """
        Calculate percentage

        Args:
            part: Part value
            total: Total value
            decimals: Decimal places

        Returns:
            Percentage
        """
        if total == 0:
            return 0.0

        percentage = (part / total) * 100
        return round(percentage, decimals)

    @staticmethod
    def count_by(values: Iterable[Optional[str]], missing: str = "Unknown") -> Dict[str, int]:
        """
        Count occurrences of each value, keeping first-seen order

        Args:
            values: Values to count; None and "" are counted under `missing`
            missing: Key for unset values

        Returns:
            Dict of value -> count
        """
        counts: Dict[str, int] = {}
        for value in values:
            key = value if value else missing
            counts[key] = counts.get(key, 0) + 1
        return counts


# Global instance
helpers = Helpers()


# Convenience functions
def utc_now() -> datetime:
    """Current UTC time"""
    return helpers.utc_now()


def normalize_email(email: Optional[str]) -> str:
    """Normalize email"""
    return helpers.normalize_email(email)


def calculate_percentage(part: float, total: float, decimals: int = 1) -> float:
    """Calculate percentage"""
    return helpers.calculate_percentage(part, total, decimals)


def count_by(values: Iterable[Optional[str]], missing: str = "Unknown") -> Dict[str, int]:
    """Count values by key"""
    return helpers.count_by(values, missing)
