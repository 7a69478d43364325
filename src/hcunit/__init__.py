"""
hcunit — HC amounts and denomination conversion.

Amounts are held as an integer count of atoms and projected onto HC, mHC,
uHC, bits, dbits or a fiat currency on demand.
"""

__version__ = "0.1.0"

from .errors import InvalidArgumentError, InvalidRateError, UnitError, UnknownCodeError
from .units import ATOMIC_CODE, BASE_CODE, FIAT_DECIMALS, UNITS, lookup
from .unit import ExchangeRate, Unit

__all__ = [
    "Unit", "ExchangeRate",
    "UNITS", "BASE_CODE", "ATOMIC_CODE", "FIAT_DECIMALS", "lookup",
    "UnitError", "UnknownCodeError", "InvalidRateError", "InvalidArgumentError",
]
