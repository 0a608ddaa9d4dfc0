"""
Exceptions for Depot.

All errors are StockError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class DepotError(Exception):
    """
    Base error carrying a code, a human-readable message and context data.

    Subclasses provide ``_default_messages`` keyed by code; an explicit
    ``message`` overrides the table.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.data:
            context = ', '.join(f'{k}={v}' for k, v in self.data.items())
            return f"[{self.code}] {self.message} ({context})"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"


class StockError(DepotError):
    """
    Structured exception for stock operations.

    Usage:
        try:
            inventory.transfer(TransferInput.from_payload(payload))
        except StockError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.available} available")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'NOT_FOUND': 'Referenced record does not exist',
        'INSUFFICIENT_STOCK': 'Not enough quantity in the source warehouse',
        'INVALID_QUANTITY': 'Invalid quantity (must be a positive integer)',
        'INVALID_INPUT': 'Invalid input',
        'INVALID_STATUS': 'Invalid status for this operation',
        'ITEM_EXISTS': 'An item with this name already exists in the warehouse',
        'IN_USE': 'Record is referenced by other records',
        'PERSISTENCE_FAILURE': 'Storage operation failed',
    }

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }
