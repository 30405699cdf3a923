import unittest

from zr.lang import numerical
from zr.lang.error import RuntimeValueError, TypeMismatchError
from zr.lang.values import Value, ValueType


def int32(num):
    return Value(ValueType.INT32, num)


def int64(num):
    return Value(ValueType.INT64, num)


def flt(num):
    return Value(ValueType.FLOAT, num)


class NumericalTestCase(unittest.TestCase):

    def test_number(self):
        should_pass = {
            "0": int64(0),
            "9223372036854775807": int64(numerical.INT64_MAX),
            "2.5": flt(2.5),
            "10.0": flt(10.0),
        }
        for case, result in should_pass.items():
            self.assertEqual(result, numerical.number(case), case)

        self.assertEqual(flt(3.0), numerical.number("3", ValueType.FLOAT))
        self.assertEqual(int32(7), numerical.number("7", ValueType.INT32))

        should_fail = [("9223372036854775808", ValueType.INT64), ("2147483648", ValueType.INT32)]
        for case, value_type in should_fail:
            self.assertRaises(RuntimeValueError, numerical.number, case, value_type)

    def test_promote(self):
        cases = [
            (int32(1), int32(2), ValueType.INT64),
            (int32(1), int64(2), ValueType.INT64),
            (int64(1), flt(2.0), ValueType.FLOAT),
            (int32(1), flt(2.0), ValueType.FLOAT),
        ]
        for left, right, expected in cases:
            self.assertEqual(expected, numerical.promote(left, right)[0], (left, right))

    def test_arithmetic(self):
        cases = [
            ("+", int64(2), int64(3), int64(5)),
            ("-", int32(2), int32(3), int64(-1)),
            ("*", int64(4), flt(2.5), flt(10.0)),
            ("+", flt(10.5), int64(2), flt(12.5)),
            ("/", int64(7), int64(2), int64(3)),
            ("/", int64(-7), int64(2), int64(-3)),
            ("/", int64(7), int64(-2), int64(-3)),
            ("/", int64(-7), int64(-2), int64(3)),
            ("/", flt(7.0), int64(2), flt(3.5)),
        ]
        for op, left, right, expected in cases:
            self.assertEqual(expected, numerical.arithmetic(op, left, right), (op, left, right))

    def test_arithmetic_errors(self):
        should_fail = [
            ("/", int64(1), int64(0)),
            ("/", flt(1.0), flt(0.0)),
            ("/", int64(1), flt(0.0)),
            ("+", int64(numerical.INT64_MAX), int64(1)),
            ("*", int64(numerical.INT64_MIN), int64(-1)),
        ]
        for op, left, right in should_fail:
            self.assertRaises(RuntimeValueError, numerical.arithmetic, op, left, right)

    def test_compare(self):
        cases = [
            (">", int64(2), int64(1), True),
            ("<", int64(2), flt(2.5), True),
            ("==", int32(3), int64(3), True),
            ("==", int64(3), flt(3.0), True),
            ("!=", int64(3), int64(3), False),
            ("<=", flt(1.5), flt(1.5), True),
            (">=", int64(1), int64(2), False),
        ]
        for op, left, right, expected in cases:
            self.assertEqual(Value(ValueType.BOOL, expected), numerical.compare(op, left, right), (op, left, right))

    def test_convert(self):
        should_pass = [
            (int32(5), ValueType.INT64, int64(5)),
            (int64(5), ValueType.INT32, int32(5)),
            (int64(5), ValueType.FLOAT, flt(5.0)),
            (int32(5), ValueType.FLOAT, flt(5.0)),
            (flt(5.0), ValueType.FLOAT, flt(5.0)),
        ]
        for value, target, result in should_pass:
            self.assertEqual(result, numerical.convert(value, target), (value, target))

        self.assertRaises(RuntimeValueError, numerical.convert, int64(3000000000), ValueType.INT32)

        should_fail = [
            (flt(5.0), ValueType.INT64),
            (flt(5.0), ValueType.INT32),
            (int64(1), ValueType.BOOL),
            (int64(1), ValueType.STRING),
            (Value(ValueType.STRING, "1"), ValueType.INT64),
            (Value(ValueType.BOOL, True), ValueType.INT64),
        ]
        for value, target in should_fail:
            self.assertRaises(TypeMismatchError, numerical.convert, value, target)


if __name__ == '__main__':
    unittest.main()
