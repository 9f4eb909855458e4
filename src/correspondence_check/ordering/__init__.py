"""Ordering domain exports."""

from .order_validator import (
    OrderCheck,
    OrderValidationError,
    find_order_preserving_pairing,
    is_order_preserving,
    validate_order,
)

__all__ = [
    "OrderCheck",
    "OrderValidationError",
    "is_order_preserving",
    "find_order_preserving_pairing",
    "validate_order",
]
