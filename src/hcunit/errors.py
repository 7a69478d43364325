"""
hcunit error types.

Every failure is raised synchronously at the offending call. A Unit either
constructs validly or not at all.
"""


class UnitError(Exception):
    """Base error for all hcunit operations."""
    pass


class UnknownCodeError(UnitError):
    """Denomination code is not in the unit table."""
    def __init__(self, code):
        self.code = code
        super().__init__(f"Unrecognized unit code: {code}")


class InvalidRateError(UnitError):
    """Exchange rate is not a positive finite number."""
    def __init__(self, rate):
        self.rate = rate
        super().__init__(f"Invalid exchange rate: {rate}")


class InvalidArgumentError(UnitError, ValueError):
    """A precondition on an argument did not hold."""
    pass
