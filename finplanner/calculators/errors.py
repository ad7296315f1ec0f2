"""Exceptions raised by the calculators.

All of them derive from :class:`ValueError` so callers that only care about
"bad input" can catch that, while the dashboard catches
:class:`CalculatorError` and shows the message next to the inputs.
"""


class CalculatorError(ValueError):
    """Base class for invalid calculator parameters."""


class InvalidRange(CalculatorError):
    """An age or horizon range is empty or reversed."""


class InvalidPercentage(CalculatorError):
    """A rate is negative or an allocation does not add up to 100%."""


class DivisionUndefined(CalculatorError):
    """A ratio has a zero denominator.

    The tax engine reports a 0% effective rate for zero income instead of
    raising this; it exists for callers building their own ratios.
    """


__all__ = ["CalculatorError", "InvalidRange", "InvalidPercentage", "DivisionUndefined"]
