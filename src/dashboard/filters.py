"""Value filters used when rendering entity lists.

FilterConfig registers them on a FilterRegistry under the names templates
refer to them by.
"""

from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

MEMORY_UNITS = ("B", "KB", "MB", "GB", "TB")


def _to_decimal(value: Any) -> Decimal | None:
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def number_round(value: Any, precision: int = 0) -> str:
    """Round half up to ``precision`` decimals; non-numbers come back as-is."""
    number = _to_decimal(value)
    if number is None:
        return str(value)
    if precision < 0:
        raise ValueError(f"precision must not be negative, got {precision}")
    quantum = Decimal(1).scaleb(-precision)
    return str(number.quantize(quantum, rounding=ROUND_HALF_UP))


def change_unit(value: Any, from_unit: str, to_unit: str) -> str:
    """Convert a memory size between B, KB, MB, GB and TB (1024 based).

    >>> change_unit(2147483648, "B", "GB")
    '2 GB'
    """
    units = [unit.upper() for unit in (from_unit, to_unit)]
    for unit in units:
        if unit not in MEMORY_UNITS:
            raise ValueError(f"Unknown memory unit {unit!r}")
    number = _to_decimal(value)
    if number is None:
        raise ValueError(f"Cannot convert non-numeric value {value!r}")
    shift = MEMORY_UNITS.index(units[0]) - MEMORY_UNITS.index(units[1])
    converted = number * (Decimal(1024) ** shift)
    rounded = number_round(converted, 2)
    if "." in rounded:
        rounded = rounded.rstrip("0").rstrip(".")
    return f"{rounded} {units[1]}"


class FilterRegistry:
    def __init__(self) -> None:
        self._filters: dict[str, Callable[..., Any]] = {}

    def filter(self, name: str, func: Callable[..., Any]) -> None:
        self._filters[name] = func

    def get(self, name: str) -> Callable[..., Any]:
        return self._filters[name]

    def __contains__(self, name: object) -> bool:
        return name in self._filters


class FilterConfig:
    def __init__(self, register: FilterRegistry) -> None:
        register.filter("numberRound", number_round)
        register.filter("changeUnit", change_unit)
