"""Domain-specific exceptions"""

from decimal import Decimal
from typing import Any


class SettlementError(Exception):
    """Base exception for the settlement engine"""

    pass


class InvalidInputError(SettlementError):
    """An input is missing, negative, non-numeric or out of range"""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class AllocationConsistencyError(SettlementError):
    """Bill components or an allocation do not add up to the expected total"""

    def __init__(self, expected: Decimal, actual: Decimal, context: str) -> None:
        self.expected = expected
        self.actual = actual
        self.context = context
        super().__init__(f"{context}: expected {expected}, got {actual}")
