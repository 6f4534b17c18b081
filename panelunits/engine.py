#
# Panel Units Conversion Engine
#

"""
Fail-soft conversion of values between registry units.

convert() never raises: unknown units, cross-category pairs, zero divisors and
non-numeric values all degrade to a number, because callers render whatever comes
back. Boolean-formatted sources always convert to 1.

Arithmetic is exact (fractions.Fraction) from input to result; the value is turned
into a standard int or float only once, at the end.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .categories import CategoryName
from .numeric import as_fraction, std_numeric
from .registry import Category, get_category, list_categories
from .sentinels import NOT_FOUND, NotFoundType, iffound

logger = logging.getLogger(__name__)


# @formatter:off

class EngineConf:
    """
    Conversion defaults.

    Attributes:
        FALLBACK_VALUE (int)       : Result for anything that cannot be converted.
        BOOLEAN_VALUE (int)        : Result for any boolean-formatted source unit.
        LEGACY_TARGET_LOOKUP (bool): Default for convert(legacy_target_lookup=None).
        PRIORITY_CATEGORIES (tuple): Categories searched first, in this order, for a unit factor.
                                     Read at call time like the other settings.
    """
    FALLBACK_VALUE = 0
    BOOLEAN_VALUE = 1
    LEGACY_TARGET_LOOKUP = False
    PRIORITY_CATEGORIES = (
        CategoryName.DATA,
        CategoryName.TIME,
        CategoryName.DATA_RATE,
        CategoryName.MISCELLANEOUS,
        CategoryName.THROUGHPUT,
    )


engine_conf = EngineConf()

# @formatter:on


@lru_cache(maxsize=32)
def _lookup_chains(priority: tuple[str, ...]) -> tuple[tuple[Category, ...], tuple[Category, ...]]:
    """Priority tables and the full factor lookup order built from them."""
    tables = []
    for name in priority:
        category = get_category(name)
        if category is None:
            logger.warning("Unknown priority category %r ignored", name)
        elif category not in tables:
            tables.append(category)
    tables = tuple(tables)
    rest = tuple(c for c in list_categories() if c not in tables and c.has_factors)
    return tables, tables + rest


PRIORITY_LOOKUP, FACTOR_LOOKUP_ORDER = _lookup_chains(tuple(EngineConf.PRIORITY_CATEGORIES))
"""
Lookup chains for the default EngineConf.PRIORITY_CATEGORIES.

PRIORITY_LOOKUP holds the priority tables alone, the complete chain in legacy mode.
FACTOR_LOOKUP_ORDER is the priority tables, then every other category with factors
in registry order.
"""

_BOOLEAN = get_category(CategoryName.BOOLEAN)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class ConversionRequest:
    """
    A value tagged with source and target unit ids.

    Either unit may be None; convert_request() still returns a number.
    """

    value: Any
    source_unit: str | None = None
    target_unit: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConversionRequest":
        """
        Build from a mapping with either camelCase or snake_case keys.

        Examples:
            >>> ConversionRequest.from_mapping({"value": 1, "sourceUnit": "hours", "targetUnit": "seconds"})
            ConversionRequest(value=1, source_unit='hours', target_unit='seconds')
        """
        return cls(
            value=data.get("value"),
            source_unit=data.get("sourceUnit", data.get("source_unit")),
            target_unit=data.get("targetUnit", data.get("target_unit")),
        )


# Main API functions ---------------------------------------------------------------------------------------------------

def convert(
        value,
        source_unit: str | None = None,
        target_unit: str | None = None,
        *,
        legacy_target_lookup: bool | None = None,
) -> int | float:
    """
    Convert value from source_unit to target_unit.

    Steps:
        1. A Boolean-category source unit returns 1, whatever the value and target.
        2. Each unit's factor is looked up across the priority categories of engine_conf,
           then every other category with factors; first hit wins.
        3. A unit without a factor counts as factor 0.
        4. result = value * source_factor / target_factor, computed exactly.
        5. Division by zero, NaN, infinities and non-numeric values return 0.

    No check is made that both units belong to the same category.

    Args:
        value: Number to convert: int, float, Decimal, Fraction or numeric str.
        source_unit: Unit id of value, or None.
        target_unit: Unit id wanted, or None.
        legacy_target_lookup: If True, reproduce the historic lookup exactly: only
            the priority tables are searched, and the last one is queried with the *source*
            unit instead of the target unit. None uses engine_conf.LEGACY_TARGET_LOOKUP.

    Returns:
        int if the exact result is integral, float otherwise.

    Examples:
        >>> convert(1, "kibibytes", "bytesIEC")
        1024
        >>> convert(1500, "milliseconds", "seconds")
        1.5
        >>> convert(5, "not-a-real-unit", "seconds")
        0
        >>> convert(0, "onOff", "seconds")
        1
    """
    if is_boolean_unit(source_unit):
        return engine_conf.BOOLEAN_VALUE

    source_factor, target_factor = _resolve_pair(source_unit, target_unit, legacy_target_lookup)
    return _scale(value, source_factor, target_factor)


def convert_request(request: ConversionRequest, *, legacy_target_lookup: bool | None = None) -> int | float:
    """convert() taking a ConversionRequest."""
    return convert(
        request.value,
        request.source_unit,
        request.target_unit,
        legacy_target_lookup=legacy_target_lookup,
    )


def convert_many(
        values: Iterable,
        source_unit: str | None = None,
        target_unit: str | None = None,
        *,
        legacy_target_lookup: bool | None = None,
) -> list[int | float]:
    """
    Convert a series of values between the same pair of units.

    Factors are resolved once; each element gets exactly the result convert() would give.
    A values argument that is not iterable (None, a bare number) gives [].
    """
    if not isinstance(values, Iterable):
        logger.debug("Cannot iterate values %r, returning []", values)
        return []

    if is_boolean_unit(source_unit):
        return [engine_conf.BOOLEAN_VALUE for _ in values]

    source_factor, target_factor = _resolve_pair(source_unit, target_unit, legacy_target_lookup)
    return [_scale(v, source_factor, target_factor) for v in values]


def is_boolean_unit(unit_id: str | None) -> bool:
    """True if unit_id is a unit of the Boolean category."""
    return unit_id in _BOOLEAN


def resolve_factor(
        unit_id: str | None,
        *,
        lookup: tuple[Category, ...] | None = None,
) -> Fraction | NotFoundType:
    """
    Factor of unit_id from the first category in lookup that has it with a factor.

    lookup defaults to the full chain built from engine_conf.PRIORITY_CATEGORIES.
    Returns NOT_FOUND when no category in lookup gives a factor.

    Examples:
        >>> resolve_factor("minutes")
        Fraction(60, 1)
        >>> resolve_factor("celsius")
        <NOT_FOUND>
    """
    if lookup is None:
        _, lookup = _current_chains()
    for category in lookup:
        factor = category.factor_of(unit_id)
        if factor is not NOT_FOUND:
            return factor
    return NOT_FOUND


# Private Methods ------------------------------------------------------------------------------------------------------

def _current_chains() -> tuple[tuple[Category, ...], tuple[Category, ...]]:
    """Lookup chains for the priority categories engine_conf holds right now."""
    return _lookup_chains(tuple(engine_conf.PRIORITY_CATEGORIES))


def _resolve_pair(
        source_unit: str | None,
        target_unit: str | None,
        legacy_target_lookup: bool | None,
) -> tuple[Fraction, Fraction]:
    """Source and target factors, with NOT_FOUND replaced by an explicit zero."""
    if legacy_target_lookup is None:
        legacy_target_lookup = engine_conf.LEGACY_TARGET_LOOKUP

    priority, full = _current_chains()
    if legacy_target_lookup:
        source_factor = resolve_factor(source_unit, lookup=priority)
        target_factor = resolve_factor(target_unit, lookup=priority[:-1])
        if target_factor is NOT_FOUND and priority:
            target_factor = priority[-1].factor_of(source_unit)
    else:
        source_factor = resolve_factor(source_unit, lookup=full)
        target_factor = resolve_factor(target_unit, lookup=full)

    if source_factor is NOT_FOUND:
        logger.debug("No factor for source unit %r, using 0", source_unit)
    if target_factor is NOT_FOUND:
        logger.debug("No factor for target unit %r, using 0", target_unit)

    return iffound(source_factor, default=Fraction(0)), iffound(target_factor, default=Fraction(0))


def _scale(value, source_factor: Fraction, target_factor: Fraction) -> int | float:
    number = as_fraction(value, on_error="none")
    if number is None:
        logger.debug("Cannot convert value %r, falling back to %r", value, engine_conf.FALLBACK_VALUE)
        return engine_conf.FALLBACK_VALUE

    try:
        result = number * source_factor / target_factor
    except ZeroDivisionError:
        logger.debug("Target factor is 0 for value %r, falling back to %r", value, engine_conf.FALLBACK_VALUE)
        return engine_conf.FALLBACK_VALUE

    return std_numeric(result)
