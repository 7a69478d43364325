"""
HC amounts as an immutable value type.

A Unit stores a single integer: the amount in atoms. It is built from an
amount in any known denomination, or from a fiat amount and an exchange
rate, and every other representation is derived from the atom count.

    Unit.from_hc(1.3).to_atoms()         # 130000000
    Unit.from_micros(1.3).to(Unit.mHC)   # 0.0013
    Unit.from_fiat(1.3, 350).bits        # 3714.29
    Unit(1.3, Unit.bits).HC              # 1.3e-06
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Union

from .errors import InvalidArgumentError
from .preconditions import check_argument
from .units import (
    ATOMIC_CODE,
    BASE_CODE,
    DecimalLike,
    amount_to_atoms,
    as_decimal,
    as_rate,
    atoms_to_amount,
    base_to_fiat,
    fiat_to_base,
    lookup,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeRate:
    """Fiat per one HC. Validated on creation."""

    value: DecimalLike

    def __post_init__(self):
        object.__setattr__(self, "value", as_rate(self.value))


CodeOrRate = Union[str, ExchangeRate, DecimalLike]


def _resolve_rate(code_or_rate: Any) -> Decimal | None:
    """Return the rate if the argument is one, None if it names a unit code.

    Strings are always unit codes; ints, floats and Decimals are always rates.
    """
    if isinstance(code_or_rate, ExchangeRate):
        return code_or_rate.value
    if isinstance(code_or_rate, (int, float, Decimal)) and not isinstance(code_or_rate, bool):
        return as_rate(code_or_rate)
    return None


class _UnitAccessor:
    """Unit code on the class, converted amount on an instance."""

    def __init__(self, code: str):
        lookup(code)
        self.code = code

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.code
        return instance.to(self.code)

    def __set__(self, instance, value):
        raise AttributeError(f"'{self.code}' is read-only")


class Unit:
    """An amount of HC, held as an integer number of atoms."""

    __slots__ = ("_atoms",)

    HC = _UnitAccessor("HC")
    mHC = _UnitAccessor("mHC")
    uHC = _UnitAccessor("uHC")
    bits = _UnitAccessor("bits")
    dbits = _UnitAccessor("dbits")
    atoms = _UnitAccessor("atoms")

    def __init__(self, amount: DecimalLike, code_or_rate: CodeOrRate):
        """
        Args:
            amount: Amount in the given unit, or a fiat amount when a rate is given.
            code_or_rate: A unit code such as ``Unit.bits``, or the exchange
                rate in fiat per HC.

        Raises:
            UnknownCodeError: The unit code is not in the table.
            InvalidRateError: The rate is zero, negative or not finite.
            InvalidArgumentError: The amount is not a finite number.
        """
        value = as_decimal(amount)
        rate = _resolve_rate(code_or_rate)
        if rate is not None:
            logger.debug("Converting fiat amount %s at rate %s to %s", value, rate, BASE_CODE)
            value = fiat_to_base(value, rate)
            code = BASE_CODE
        else:
            code = code_or_rate
        object.__setattr__(self, "_atoms", amount_to_atoms(value, code))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __reduce__(self):
        return (self.__class__, (self._atoms, ATOMIC_CODE))

    # ── Factories ─────────────────────────────────────────────────

    @classmethod
    def from_hc(cls, amount: DecimalLike) -> Unit:
        return cls(amount, BASE_CODE)

    @classmethod
    def from_millis(cls, amount: DecimalLike) -> Unit:
        return cls(amount, "mHC")

    from_milis = from_millis

    @classmethod
    def from_micros(cls, amount: DecimalLike) -> Unit:
        return cls(amount, "dbits")

    from_dbits = from_micros

    @classmethod
    def from_bits(cls, amount: DecimalLike) -> Unit:
        return cls(amount, "bits")

    @classmethod
    def from_atoms(cls, amount: DecimalLike) -> Unit:
        return cls(amount, ATOMIC_CODE)

    @classmethod
    def from_fiat(cls, amount: DecimalLike, rate: DecimalLike) -> Unit:
        """Build from a fiat amount and the HC/fiat exchange rate."""
        return cls(amount, ExchangeRate(rate))

    @classmethod
    def from_object(cls, data: Mapping[str, Any]) -> Unit:
        """Build from a mapping with ``amount`` and ``code`` keys."""
        check_argument(isinstance(data, Mapping), "Argument is expected to be an object")
        return cls(data.get("amount"), data.get("code"))

    from_dict = from_object

    @classmethod
    def from_json(cls, text: str) -> Unit:
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError("Argument is expected to be a JSON object") from e
        return cls.from_object(data)

    # ── Conversions ───────────────────────────────────────────────

    def to(self, code_or_rate: CodeOrRate) -> float | int:
        """Return the amount in a unit, or its fiat value at a rate.

        Fiat values are rounded to cents. Atoms come back as the exact int.
        """
        rate = _resolve_rate(code_or_rate)
        if rate is not None:
            return float(base_to_fiat(self._atoms, rate))

        _, precision = lookup(code_or_rate)
        if precision == 0:
            return int(atoms_to_amount(self._atoms, code_or_rate))
        return float(atoms_to_amount(self._atoms, code_or_rate))

    def to_hc(self) -> float:
        return self.to(BASE_CODE)

    def to_millis(self) -> float:
        return self.to("mHC")

    to_milis = to_millis

    def to_micros(self) -> float:
        return self.to("dbits")

    to_dbits = to_micros

    def to_bits(self) -> float:
        return self.to("bits")

    def to_atoms(self) -> int:
        return self._atoms

    def at_rate(self, rate: ExchangeRate | DecimalLike) -> float:
        """Fiat value at ``rate`` (fiat per HC), rounded to cents."""
        return self.to(rate)

    # ── Views ─────────────────────────────────────────────────────

    def to_object(self) -> dict[str, Any]:
        """Plain representation, always in HC."""
        return {"amount": self.to_hc(), "code": BASE_CODE}

    to_dict = to_object

    def to_json(self) -> str:
        return json.dumps(self.to_object())

    def inspect(self) -> str:
        return f"<Unit: {self}>"

    def __str__(self) -> str:
        return f"{self._atoms} {ATOMIC_CODE}"

    def __repr__(self) -> str:
        return self.inspect()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self._atoms == other._atoms

    def __hash__(self) -> int:
        return hash((Unit, self._atoms))
