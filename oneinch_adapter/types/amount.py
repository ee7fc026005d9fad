"""
Token amount type

Amounts cross the wire as decimal digit strings and are kept as exact Python
integers, never floats.
"""

from functools import total_ordering
from typing import Any, Union

from ..errors import InvalidAmount


@total_ordering
class Amount:
    """
    Non-negative arbitrary-precision token quantity in its smallest unit (wei)

    Usage:
        amount = Amount.parse("1000000")
        str(amount)      # "1000000"
        int(amount)      # 1000000
        Amount.of(10**18) > amount
    """

    __slots__ = ("_value",)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidAmount(value, "expected a non-negative integer")
        if value < 0:
            raise InvalidAmount(value, "amount cannot be negative")
        self._value = value

    @classmethod
    def parse(cls, s: str, parameter: str = "amount") -> "Amount":
        """
        Parse the canonical wire form

        Raises:
            InvalidAmount: If s is empty, has a non-digit character, or has
                leading zeros (other than the literal "0")
        """
        if not isinstance(s, str):
            raise InvalidAmount(s, "expected a decimal string", parameter=parameter)
        if not s:
            raise InvalidAmount(s, "empty string", parameter=parameter)
        if not (s.isascii() and s.isdigit()):
            raise InvalidAmount(s, "must contain only digits 0-9", parameter=parameter)
        if len(s) > 1 and s[0] == "0":
            raise InvalidAmount(s, "leading zeros are not allowed", parameter=parameter)
        try:
            return cls(int(s))
        except ValueError as e:
            # int() refuses very long digit strings
            raise InvalidAmount(s, str(e), parameter=parameter) from e

    @classmethod
    def of(cls, value: Union["Amount", int, str], parameter: str = "amount") -> "Amount":
        """Coerce an Amount, a non-negative int or a digit string"""
        if isinstance(value, Amount):
            return value
        if isinstance(value, str):
            return cls.parse(value, parameter=parameter)
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise InvalidAmount(value, "amount cannot be negative", parameter=parameter)
            return cls(value)
        raise InvalidAmount(value, f"unsupported type {type(value).__name__}", parameter=parameter)

    @property
    def value(self) -> int:
        return self._value

    def to_string(self) -> str:
        return str(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Amount({self._value})"

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Amount):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Amount):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_value"):
            raise AttributeError("Amount is immutable")
        object.__setattr__(self, name, value)
