# delivery_lab/core/errors.py
# Exception types raised at the boundaries of the planner.
# "No path" is never an exception: searches report it through SearchResult.
from __future__ import annotations


class DeliveryLabError(Exception):
    """Base class for every error raised by delivery_lab."""


class GridValidationError(DeliveryLabError, ValueError):
    """A Grid was built from inputs that break one of its invariants."""

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(f"{invariant}: {detail}")


class BlockedEdgeError(DeliveryLabError, ValueError):
    """A cost was requested for an edge that does not exist (blocked or zero traffic)."""


class UnknownStrategyError(DeliveryLabError, ValueError):
    def __init__(self, identifier, accepted):
        self.identifier = identifier
        self.accepted = tuple(accepted)
        super().__init__(
            f"unknown search strategy {identifier!r}; expected one of: {', '.join(self.accepted)}"
        )


class GridFormatError(DeliveryLabError, ValueError):
    """Grid text or config could not be parsed."""


class ConfigError(DeliveryLabError, ValueError):
    """An environment tunable holds a value of the wrong type."""
