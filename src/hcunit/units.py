"""Denomination table and fixed-point helpers.

Amounts are stored in atoms everywhere. The other denominations are only
projections of that integer, rounded half away from zero to the display
precision of the target unit.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from types import MappingProxyType
from typing import Mapping, Union

from .errors import InvalidArgumentError, InvalidRateError, UnknownCodeError


logger = logging.getLogger(__name__)

DecimalLike = Union[Decimal, float, int, str]

BASE_CODE = "HC"
ATOMIC_CODE = "atoms"
FIAT_DECIMALS = 2

# code -> (atoms per unit, display precision)
UNITS: Mapping[str, tuple[int, int]] = MappingProxyType({
    "HC": (10**8, 8),  # 1 HC is 100,000,000 atoms
    "mHC": (10**5, 5),
    "uHC": (10**2, 2),
    "bits": (10**2, 2),  # 1 bit is 1 uHC
    "dbits": (10**2, 2),
    "atoms": (1, 0),
})

_ONE = Decimal(1)


def lookup(code: object) -> tuple[int, int]:
    """Return ``(scale, precision)`` for a denomination code."""
    if not isinstance(code, str) or code not in UNITS:
        raise UnknownCodeError(code)
    return UNITS[code]


def as_decimal(value: DecimalLike) -> Decimal:
    """Convert an amount to Decimal via ``str`` so float noise stays out."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Amount is expected to be a number, got {value!r}")
    if isinstance(value, Decimal):
        dec = value
    else:
        try:
            dec = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as e:
            raise InvalidArgumentError(f"Amount is expected to be a number, got {value!r}") from e
    if not dec.is_finite():
        raise InvalidArgumentError(f"Amount is expected to be finite, got {value!r}")
    return dec


def as_rate(value: DecimalLike) -> Decimal:
    """Validate an exchange rate (fiat per HC). It must be finite and positive."""
    try:
        rate = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidRateError(value) from e
    if not rate.is_finite() or rate <= 0:
        logger.debug("Rejected exchange rate %r", value)
        raise InvalidRateError(value)
    return rate


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


def round_to_precision(value: Decimal, places: int) -> Decimal:
    """Round half away from zero to ``places`` decimal digits."""
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the kept places
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(_ONE.scaleb(-places), rounding=ROUND_HALF_UP)


def amount_to_atoms(amount: Decimal, code: str) -> int:
    """Convert an amount in ``code`` to the nearest whole number of atoms."""
    scale, _ = lookup(code)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits(amount) + _digits(Decimal(scale)))
        return int(round_to_precision(amount * scale, 0))


def atoms_to_amount(atoms: int, code: str) -> Decimal:
    """Project an atom count onto ``code`` at that unit's display precision."""
    scale, precision = lookup(code)
    value = Decimal(atoms)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits(value))
        return round_to_precision(value / scale, precision)


def fiat_to_base(amount: Decimal, rate: Decimal) -> Decimal:
    """HC amount for a fiat amount, carried at least to atom resolution."""
    _, places = UNITS[BASE_CODE]
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() - rate.adjusted() + places + 3)
        return amount / rate


def base_to_fiat(atoms: int, rate: Decimal) -> Decimal:
    """Fiat value of an atom count at ``rate``, rounded to FIAT_DECIMALS."""
    value = atoms_to_amount(atoms, BASE_CODE)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits(value) + _digits(rate))
        return round_to_precision(value * rate, FIAT_DECIMALS)
