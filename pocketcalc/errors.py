"""Calculation errors raised at the core's input boundary."""


class CalculatorError(ValueError):
    """Base class for rejected calculator input."""


class InvalidFrequency(CalculatorError):
    """A periodic amount carries a frequency outside the supported set."""

    def __init__(self, frequency):
        self.frequency = frequency
        super().__init__(f"Unsupported frequency: {frequency!r}")


class InvalidDebtVariant(CalculatorError):
    """A debt record does not match any known debt shape."""

    def __init__(self, variant):
        self.variant = variant
        super().__init__(f"Unknown debt type: {variant!r}")
