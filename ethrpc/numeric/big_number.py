"""Arbitrary-precision numbers for wei-scale chain quantities.

Balances, gas amounts, nonces and block numbers routinely exceed the range a
64-bit float represents exactly, so every numeric value returned by the client
is a ``BigNumber`` backed by ``decimal.Decimal``.

Addition, subtraction and multiplication are exact. Division keeps
``DIVISION_PRECISION`` significant digits; truncation only happens through
``floor()`` and ``//``.

Example:
    ```python
    from ethrpc.numeric.big_number import BigNumber, big_number

    balance = BigNumber.from_hex("0xde0b6b3a7640000")
    balance.to_decimal_string()
    # '1000000000000000000'
    (balance / 10**18).to_decimal_string()
    # '1'
    big_number("12345").to_hex_string()
    # '0x3039'
    ```
"""

import re

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from functools import total_ordering

from typing import Any, Self

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ethrpc.helpers.constants import DIVISION_PRECISION, MAX_SAFE_INTEGER
from ethrpc.helpers.errors import (
    InvalidArgument,
    InvalidNumericInput,
    NumericOverflowError,
)


_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_HEX_PATTERN = re.compile(r"^-?0[xX][0-9a-fA-F]+$")

_TRAPS = [InvalidOperation, DivisionByZero, Overflow]
_UNIT = Decimal(1)

# No rounding ever happens at MAX_PREC: sums and products are sized to their operands.
EXACT_CONTEXT = Context(
    prec=MAX_PREC, rounding=ROUND_HALF_EVEN, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=_TRAPS
)
DIVISION_CONTEXT = Context(
    prec=DIVISION_PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=_TRAPS,
)

type Operand = BigNumber | int | Decimal


@total_ordering
class BigNumber:
    """Immutable arbitrary-precision number.

    Build instances through the explicit constructors ``from_int``,
    ``from_decimal_string``, ``from_hex`` and ``from_decimal``, or through
    ``big_number`` which accepts any of those inputs.
    """

    __slots__ = ("_value",)

    _value: Decimal

    def __init__(self, value: Decimal) -> None:
        if not isinstance(value, Decimal) or not value.is_finite():
            msg = f"BigNumber requires a finite Decimal, got {value!r}"
            raise InvalidNumericInput(msg)
        # -0 and 0 render identically
        object.__setattr__(self, "_value", value if value else Decimal(0))

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "BigNumber is immutable"
        raise AttributeError(msg)

    # Constructors

    @classmethod
    def from_int(cls, value: int) -> Self:
        """Build from a machine integer."""
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"Expected an int, got {type(value).__name__}"
            raise InvalidNumericInput(msg)
        return cls(Decimal(value))

    @classmethod
    def from_decimal_string(cls, value: str) -> Self:
        """Build from a decimal string such as ``"1000"`` or ``"-1.5e3"``."""
        if not isinstance(value, str) or not _DECIMAL_PATTERN.match(value.strip()):
            msg = f"Invalid decimal string: {value!r}"
            raise InvalidNumericInput(msg)
        return cls(Decimal(value.strip()))

    @classmethod
    def from_hex(cls, value: str) -> Self:
        """Build from a ``0x``-prefixed hex string."""
        if not isinstance(value, str) or not _HEX_PATTERN.match(value.strip()):
            msg = f"Invalid hex string: {value!r}"
            raise InvalidNumericInput(msg)
        return cls(Decimal(int(value.strip(), 16)))

    @classmethod
    def from_decimal(cls, value: Decimal) -> Self:
        """Build from a finite ``decimal.Decimal``."""
        if not isinstance(value, Decimal):
            msg = f"Expected a Decimal, got {type(value).__name__}"
            raise InvalidNumericInput(msg)
        return cls(value)

    # Renderings

    @property
    def value(self) -> Decimal:
        """Underlying exact Decimal."""
        return self._value

    def is_integer(self) -> bool:
        """Return True when the value has no fractional part."""
        return self._value == self._value.to_integral_value()

    def to_decimal_string(self) -> str:
        """Exact decimal rendering without exponent notation."""
        # stays inside Decimal; str(int) is capped at sys.get_int_max_str_digits()
        if self.is_integer():
            return format(self._value.quantize(_UNIT, context=EXACT_CONTEXT), "f")
        return format(self._value.normalize(EXACT_CONTEXT), "f")

    def to_hex_string(self) -> str:
        """Minimal ``0x``-prefixed hex rendering of an integral value.

        Raises:
            InvalidArgument: If the value has a fractional part
        """
        if not self.is_integer():
            msg = f"Cannot render non-integral value {self} as hex"
            raise InvalidArgument(msg)
        return hex(int(self._value))

    def to_machine_number(self) -> int:
        """Convert to a plain ``int`` that survives a round trip through float.

        Values outside ``±(2**53 - 1)`` raise instead of silently losing
        precision. Use ``int()`` for an unchecked (truncating) conversion.

        Raises:
            NumericOverflowError: If the value is beyond the safe integer range
            InvalidArgument: If the value has a fractional part
        """
        if EXACT_CONTEXT.abs(self._value) > MAX_SAFE_INTEGER:
            msg = f"{self} exceeds the safe integer range of ±{MAX_SAFE_INTEGER}"
            raise NumericOverflowError(msg)
        if not self.is_integer():
            msg = f"{self} is not an integer"
            raise InvalidArgument(msg)
        return int(self._value)

    def floor(self) -> "BigNumber":
        """Largest integral value not greater than this one."""
        return BigNumber(self._value.to_integral_value(rounding=ROUND_FLOOR))

    # Arithmetic

    def __add__(self, other: Operand) -> "BigNumber":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigNumber(EXACT_CONTEXT.add(self._value, rhs))

    def __radd__(self, other: Operand) -> "BigNumber":
        return self.__add__(other)

    def __sub__(self, other: Operand) -> "BigNumber":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigNumber(EXACT_CONTEXT.subtract(self._value, rhs))

    def __rsub__(self, other: Operand) -> "BigNumber":
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return BigNumber(EXACT_CONTEXT.subtract(lhs, self._value))

    def __mul__(self, other: Operand) -> "BigNumber":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigNumber(EXACT_CONTEXT.multiply(self._value, rhs))

    def __rmul__(self, other: Operand) -> "BigNumber":
        return self.__mul__(other)

    def __truediv__(self, other: Operand) -> "BigNumber":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return BigNumber(DIVISION_CONTEXT.divide(self._value, rhs))

    def __rtruediv__(self, other: Operand) -> "BigNumber":
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return BigNumber(DIVISION_CONTEXT.divide(lhs, self._value))

    def __floordiv__(self, other: Operand) -> "BigNumber":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs == 0:
            msg = "BigNumber division by zero"
            raise ZeroDivisionError(msg)
        quotient = EXACT_CONTEXT.divide_int(self._value, rhs)
        remainder = EXACT_CONTEXT.remainder(self._value, rhs)
        # divide_int truncates toward zero
        if remainder and (self._value < 0) != (rhs < 0):
            quotient = EXACT_CONTEXT.subtract(quotient, 1)
        return BigNumber(quotient)

    def __mod__(self, other: Operand) -> "BigNumber":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self - (self // rhs) * rhs

    def __neg__(self) -> "BigNumber":
        return BigNumber(EXACT_CONTEXT.minus(self._value))

    def __pos__(self) -> "BigNumber":
        return self

    def __abs__(self) -> "BigNumber":
        return BigNumber(EXACT_CONTEXT.abs(self._value))

    # Comparison and conversion

    def __eq__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._value == rhs

    def __lt__(self, other: Operand) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return self._value < rhs

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"BigNumber('{self.to_decimal_string()}')"

    def __reduce__(self) -> tuple[Any, ...]:
        return (BigNumber, (self._value,))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate any accepted input shape and serialize as a decimal string."""
        return core_schema.no_info_plain_validator_function(
            big_number,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_decimal_string()
            ),
        )


def _coerce(other: object) -> Decimal | None:
    if isinstance(other, BigNumber):
        return other.value
    if isinstance(other, bool):
        return None
    if isinstance(other, int):
        return Decimal(other)
    if isinstance(other, Decimal) and other.is_finite():
        return other
    return None


def big_number(value: "BigNumber | int | str | Decimal") -> BigNumber:
    """Build a BigNumber from any supported input shape.

    Strings starting with ``0x`` (optionally negated) are read as hex, other
    strings as decimal. Floats and bools are rejected.

    Args:
        value: BigNumber, int, Decimal, decimal string or hex string

    Returns:
        The canonical BigNumber

    Raises:
        InvalidNumericInput: If the value is not a valid number

    Example:
        >>> big_number("0xff") == big_number("255") == big_number(255)
        True
    """
    if isinstance(value, BigNumber):
        return value
    if isinstance(value, bool):
        msg = "Booleans are not numbers"
        raise InvalidNumericInput(msg)
    if isinstance(value, int):
        return BigNumber.from_int(value)
    if isinstance(value, Decimal):
        return BigNumber.from_decimal(value)
    if isinstance(value, str):
        if value.strip().lstrip("-")[:2].lower() == "0x":
            return BigNumber.from_hex(value)
        return BigNumber.from_decimal_string(value)
    msg = f"Unsupported numeric input type: {type(value).__name__}"
    raise InvalidNumericInput(msg)


__all__ = ["BigNumber", "big_number"]
