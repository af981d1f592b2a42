from typing import List, Optional


class InventoryError(Exception):
    """Base class for inventory domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(InventoryError):
    """A usage/restock request that can never be applied (bad mode, bad amount)."""


class InsufficientStockError(UsageError):
    """Requested amount exceeds what the item currently holds."""

    def __init__(self, message: str, available: Optional[float] = None):
        super().__init__(message)
        self.available = available


class ContainerStateError(InventoryError):
    """A container snapshot breaks one of the container invariants."""

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems) or "invalid container state")
        self.problems = list(problems)
