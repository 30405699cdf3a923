"""Numbers in the zr language: int32, int64 and float (a C double). Covers literal parsing, the promotion ladder used by
binary operators (int32 -> int64 -> float) and the narrow set of conversions allowed by typed let statements.

Integer results are kept within 64-bit range; anything outside is an error rather than a wrap-around.
"""

from zr.lang.error import RuntimeValueError, TypeMismatchError
from zr.lang.values import Value, ValueType


INT32_MIN, INT32_MAX = -2 ** 31, 2 ** 31 - 1
INT64_MIN, INT64_MAX = -2 ** 63, 2 ** 63 - 1

RANGES = {ValueType.INT32: (INT32_MIN, INT32_MAX), ValueType.INT64: (INT64_MIN, INT64_MAX)}


def in_range(num, value_type):
    """Whether or not integer num fits in value_type (INT32 or INT64)."""
    low, high = RANGES[value_type]
    return low <= num <= high


def number(text, value_type=ValueType.INT64, at=None):
    """Returns Value of numeric literal text. A '.' in text always makes a float, whatever value_type says."""
    if "." in text or value_type is ValueType.FLOAT:
        return Value(ValueType.FLOAT, float(text))

    # more significant digits than INT64_MAX has can never fit
    if len(text.lstrip("0")) > len(str(INT64_MAX)):
        raise RuntimeValueError("integer literal '{}' out of range for {}", (text, value_type), at=at)

    num = int(text)
    if not in_range(num, value_type):
        raise RuntimeValueError("integer literal '{}' out of range for {}", (text, value_type), at=at)
    return Value(value_type, num)


def promote(left, right):
    """Widens two numeric Values to a common type. Returns (common type, left data, right data)."""
    if ValueType.FLOAT in (left.type, right.type):
        return ValueType.FLOAT, float(left.data), float(right.data)
    return ValueType.INT64, left.data, right.data


def _divide(op, left, right, at):
    if right == 0:
        raise RuntimeValueError("division by zero", op, at=at)
    if isinstance(left, float):
        return left / right

    quotient = abs(left) // abs(right)  # truncates toward zero
    return quotient if (left < 0) == (right < 0) else -quotient


ARITHMETIC = {
    "+": lambda left, right, op, at: left + right,
    "-": lambda left, right, op, at: left - right,
    "*": lambda left, right, op, at: left * right,
    "/": lambda left, right, op, at: _divide(op, left, right, at),
}

COMPARISON = {
    ">": lambda left, right: left > right,
    "<": lambda left, right: left < right,
    ">=": lambda left, right: left >= right,
    "<=": lambda left, right: left <= right,
    "==": lambda left, right: left == right,
    "!=": lambda left, right: left != right,
}


def arithmetic(op, left, right, at=None):
    """Applies arithmetic op to two numeric Values after promotion."""
    result_type, left_num, right_num = promote(left, right)
    result = ARITHMETIC[op](left_num, right_num, op, at)

    if result_type is ValueType.INT64 and not in_range(result, ValueType.INT64):
        raise RuntimeValueError("integer overflow in '{}'", op, at=at)
    return Value(result_type, result)


def compare(op, left, right):
    """Applies comparison op to two numeric Values after promotion."""
    __, left_num, right_num = promote(left, right)
    return Value(ValueType.BOOL, COMPARISON[op](left_num, right_num))


def convert(value, target, at=None):
    """Converts value to target for a typed let. Only int32 -> int64, int64 -> int32 (range checked) and integer ->
    float are allowed; everything else, including anything into or out of string or bool, is a TypeMismatchError.
    """
    if value.type is target:
        return value

    if value.type in RANGES and target in RANGES:
        if not in_range(value.data, target):
            raise RuntimeValueError("value {} overflows {}", (value.data, target), at=at)
        return Value(target, value.data)

    if value.type in RANGES and target is ValueType.FLOAT:
        return Value(ValueType.FLOAT, float(value.data))

    raise TypeMismatchError("cannot convert {} to {}", (value.type, target), at=at)
