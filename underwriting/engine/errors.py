"""Errors raised by the underwriting engine.

All of them are recoverable at the call boundary. Nothing is retried.
"""


class UnderwritingError(Exception):
    """Base class for engine errors."""


class InvalidInputError(UnderwritingError, ValueError):
    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class UndefinedMetricError(UnderwritingError, ArithmeticError):
    """A metric has no finite value for the given inputs."""

    def __init__(self, metric: str, reason: str):
        self.metric = metric
        self.reason = reason
        super().__init__(f"{metric} is undefined: {reason}")


class DivisionByZeroError(UndefinedMetricError):
    """The metric's denominator is zero."""


class ZeroTermError(UnderwritingError, ValueError):
    def __init__(self, principal):
        self.principal = principal
        super().__init__(f"loan term is zero for non-zero principal {principal}")
