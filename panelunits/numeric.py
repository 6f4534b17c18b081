"""
Exact numeric coercion for unit conversion.

Inputs are turned into fractions.Fraction so that scaling by unit factors spanning
nano to peta never rounds; results are turned back into standard Python int or float
only at the very end.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from decimal import Context, Decimal, InvalidOperation
from fractions import Fraction
from typing import Literal

# @formatter:off
_MAX_EXPONENT = 1000   # |adjusted exponent| accepted for exact Decimal and str inputs
_MAX_DIGITS   = 1000   # significant digits kept from Decimal and str inputs
# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def as_fraction(
        value,
        *,
        on_error: Literal["raise", "none"] = "raise",
        allow_bool: bool = True,
) -> Fraction | None:
    """
    Convert a finite numeric value to an exact Fraction.

    Floats are read through their shortest decimal representation, so 0.1 becomes
    Fraction(1, 10) rather than the binary neighbour Fraction(0.1). This matches what
    a user typed or what a JSON payload carried.

    Decimal and numeric str inputs are bounded so the cost of the exact value stays
    small: more than _MAX_DIGITS significant digits are rounded away, magnitudes
    above 1E+_MAX_EXPONENT are errors and magnitudes below 1E-_MAX_EXPONENT read as 0.

    Parameters
    ----------
    value : various
        int, float, Decimal, Fraction, numeric str ("1.5", "1e3", "3/4"), or any
        object implementing __index__, .item() or __float__ (NumPy scalars etc.).

    on_error : {"raise", "none"}, default "raise"
        - "raise": raise TypeError for unsupported types, ValueError for NaN,
          infinities, out-of-range magnitudes and malformed numeric strings.
        - "none": return None instead.

    allow_bool : bool, default True
        If True, True/False convert to 1/0. If False, bool is a type error.

    Returns
    -------
    Fraction
        Exact value.

    None
        For None input, or any error when on_error="none".

    Examples
    --------
    >>> as_fraction(0.1)
    Fraction(1, 10)
    >>> as_fraction(Decimal("2.50"))
    Fraction(5, 2)
    >>> as_fraction("1e-9")
    Fraction(1, 1000000000)
    >>> as_fraction(float("nan"), on_error="none") is None
    True
    """
    if value is None:
        return None

    if isinstance(value, bool):
        if allow_bool:
            return Fraction(int(value))
        return _fail(on_error, TypeError(
            f"boolean values not supported, got {value}. "
            f"Set allow_bool=True to convert booleans to int (True→1, False→0)"
        ))

    if isinstance(value, Fraction):
        return value

    if isinstance(value, int):
        return Fraction(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return _fail(on_error, ValueError(f"non-finite value not supported: {value!r}"))
        return Fraction(repr(float(value)))

    if isinstance(value, Decimal):
        return _decimal_to_fraction(value, on_error=on_error)

    if isinstance(value, str):
        try:
            number = Decimal(value)
        except InvalidOperation:
            number = None
        if number is not None:
            return _decimal_to_fraction(number, on_error=on_error)
        # Ratio strings such as "3/4"
        try:
            return Fraction(value)
        except (ValueError, ZeroDivisionError) as e:
            return _fail(on_error, ValueError(f"cannot parse numeric string {value!r}: {e}"))

    # NumPy integers and friends
    if hasattr(value, '__index__'):
        try:
            return Fraction(operator.index(value))
        except (TypeError, ValueError) as e:
            return _fail(on_error, TypeError(f"cannot convert {_type_name(value)} via __index__: {e}"))

    # Array/tensor scalars
    if hasattr(value, 'item') and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, (int, float)):
            return as_fraction(result, on_error=on_error, allow_bool=allow_bool)

    if hasattr(value, '__float__'):
        try:
            as_float = float(value)
        except (TypeError, ValueError, OverflowError) as e:
            return _fail(on_error, TypeError(f"cannot convert {_type_name(value)} to float: {e}"))
        return as_fraction(as_float, on_error=on_error, allow_bool=allow_bool)

    return _fail(on_error, TypeError(
        f"unsupported numeric type: {_type_name(value)}. "
        f"Expected int, float, Decimal, Fraction, numeric str, or types implementing "
        f"__index__, .item() or __float__"
    ))


def std_numeric(
        value,
        *,
        on_error: Literal["raise", "nan", "none"] = "raise",
        allow_bool: bool = False
) -> int | float | None:
    """
    Convert numeric types to standard Python int, float, or None.

    Integer-valued Decimal and Fraction become int (arbitrary precision, exact);
    others go through __float__ and may overflow to ±inf or underflow to ±0.0.
    inf and nan floats pass through unchanged regardless of on_error.

    Parameters
    ----------
    value : various
        Python int/float/None, Decimal, Fraction, or types implementing __index__
        or __float__.

    on_error : {"raise", "nan", "none"}, default "raise"
        How to handle unsupported types: raise TypeError, return nan, or return None.

    allow_bool : bool, default False
        If True, convert bool to int. If False, bool is handled per on_error.

    Examples
    --------
    >>> std_numeric(Fraction(2048, 2))
    1024
    >>> std_numeric(Fraction(1, 8))
    0.125
    >>> std_numeric(Decimal("42.0"))
    42
    >>> std_numeric("42", on_error="none") is None
    True
    """
    if value is None:
        return None

    if isinstance(value, bool):
        if allow_bool:
            return int(value)
        return _fail_numeric(on_error, TypeError(
            f"boolean values not supported, got {value}. "
            f"Set allow_bool=True to convert booleans to int (True→1, False→0)"
        ))

    # Fast path
    if isinstance(value, (int, float)):
        return value

    if isinstance(value, (Fraction, Decimal)):
        if isinstance(value, Decimal) and (not value.is_finite() or abs(value.adjusted()) > _MAX_EXPONENT):
            return float(value)
        if value == int(value):
            return int(value)
        return _to_float(value)

    if hasattr(value, '__index__'):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            return _fail_numeric(on_error, TypeError(
                f"cannot convert {_type_name(value)} to int via __index__: {e}"
            ))

    if hasattr(value, '__float__'):
        try:
            return _to_float(value)
        except (TypeError, ValueError) as e:
            return _fail_numeric(on_error, TypeError(f"cannot convert {_type_name(value)} to float: {e}"))

    return _fail_numeric(on_error, TypeError(
        f"unsupported numeric type: {_type_name(value)}. "
        f"Expected int, float, None, Decimal, Fraction, or types implementing __index__ or __float__"
    ))


# Private Methods ------------------------------------------------------------------------------------------------------

def _decimal_to_fraction(value: Decimal, *, on_error: str) -> Fraction | None:
    """Exact Fraction of a finite Decimal of bounded magnitude, rounded to _MAX_DIGITS."""
    if not value.is_finite():
        return _fail(on_error, ValueError(f"non-finite value not supported: {value!r}"))
    if value.is_zero():
        return Fraction(0)
    exponent = value.adjusted()
    if exponent > _MAX_EXPONENT:
        return _fail(on_error, ValueError(f"magnitude out of range: exponent {exponent} exceeds {_MAX_EXPONENT}"))
    if exponent < -_MAX_EXPONENT:
        return Fraction(0)
    return Fraction(Context(prec=_MAX_DIGITS).plus(value))


def _to_float(value) -> float:
    """float(value), with overflow mapped to a signed infinity."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _fail(on_error: str, error: Exception) -> None:
    if on_error == "raise":
        raise error
    return None


def _fail_numeric(on_error: str, error: Exception) -> float | None:
    if on_error == "raise":
        raise error
    elif on_error == "nan":
        return float('nan')
    return None


def _type_name(value) -> str:
    return type(value).__name__
