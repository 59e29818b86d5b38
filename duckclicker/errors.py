from __future__ import annotations


class PurchaseError(Exception):
    """Base class for rejected purchases. ``str(err)`` is the player-facing message."""

    def __init__(self, upgrade_id: str, message: str) -> None:
        super().__init__(message)
        self.upgrade_id = upgrade_id
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnknownUpgrade(PurchaseError, KeyError):
    """The upgrade id is not in the catalog."""

    def __init__(self, upgrade_id: str) -> None:
        super().__init__(upgrade_id, f"Unknown upgrade: {upgrade_id!r}")


class Locked(PurchaseError):
    """Lifetime quacks have not reached the unlock threshold yet."""

    def __init__(self, upgrade_id: str, threshold: float) -> None:
        super().__init__(upgrade_id, f"Locked: unlock at {threshold:g} total")
        self.threshold = threshold


class InsufficientFunds(PurchaseError):
    """The current balance does not cover the price."""

    def __init__(self, upgrade_id: str, cost: int, balance: float) -> None:
        super().__init__(upgrade_id, "Not enough quacks")
        self.cost = cost
        self.balance = balance
