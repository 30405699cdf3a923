import io
import os
import unittest
from unittest import mock

from zr.lang.error import ErrorHandler, GenericException, ModuleError, RuntimeValueError
from zr.lang.session import Session
from zr.lang.source import MemorySourceProvider


class Position:

    def __init__(self, line, column):
        self.line = line
        self.column = column


@mock.patch.dict(os.environ, {"NO_COLOR": "1", "ANSI_COLORS_DISABLED": "1"})
class ErrorHandlerTestCase(unittest.TestCase):

    def test_generic_exception(self):
        error = RuntimeValueError("undefined variable '{}'", "x", at=Position(3, 7))
        self.assertEqual("undefined variable 'x'", str(error))
        self.assertEqual("x", error.expr)
        self.assertEqual((3, 7), (error.line, error.column))

        error = GenericException("no position")
        self.assertEqual("", error.expr)
        self.assertIsNone(error.line)

    def test_fatal_exits(self):
        stream = io.StringIO()
        with self.assertRaises(SystemExit) as cm:
            with ErrorHandler(stream=stream):
                raise GenericException("boom")
        self.assertEqual(1, cm.exception.code)
        self.assertIn("error: boom", stream.getvalue())

    def test_non_fatal_suppresses(self):
        stream = io.StringIO()
        handler = ErrorHandler(fatal=False, stream=stream)
        with handler:
            handler.register_file("a.zr", "let x = 1;")
            raise GenericException("boom")
        self.assertIn("error: boom", stream.getvalue())
        self.assertEqual({}, handler.traceback)

    def test_internal_error_is_reraised(self):
        stream = io.StringIO()
        with self.assertRaises(ZeroDivisionError):
            with ErrorHandler(fatal=False, stream=stream):
                raise ZeroDivisionError("oops")
        self.assertIn("[internal] error: unknown error: 'ZeroDivisionError: oops'", stream.getvalue())

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(stream=io.StringIO()):
                raise SystemExit(2)

    def test_diagnosis(self):
        stream = io.StringIO()
        handler = ErrorHandler(fatal=False, stream=stream)
        with handler:
            handler.register_file("main.zr", "let a = 1;\nprint abc + 1;")
            raise RuntimeValueError("undefined variable '{}'", "abc", at=Position(2, 7))

        lines = stream.getvalue().splitlines()
        self.assertEqual("main.zr:2:7: error: undefined variable 'abc'", lines[0])
        self.assertEqual("  print abc + 1;", lines[1])
        self.assertEqual("        ^~~", lines[2])

    def test_traceback_through_modules(self):
        stream = io.StringIO()
        handler = ErrorHandler(fatal=False, stream=stream)
        files = {"/prog/main.zr": "print 0;\nloadin \"a\";", "/prog/a.zr": "let y = 2;\nprint y / 0;"}
        with handler:
            Session(handler, MemorySourceProvider(files), io.StringIO()).run("/prog/main.zr")

        lines = stream.getvalue().splitlines()
        self.assertEqual("Traceback:", lines[0])
        self.assertEqual("  File '/prog/main.zr', line 2:", lines[1])
        self.assertEqual("    loadin \"a\";", lines[2])
        self.assertEqual("/prog/a.zr:2:9: error: division by zero", lines[3])
        self.assertEqual("  print y / 0;", lines[4])
        self.assertEqual("          ^", lines[5])

    def test_error_without_diagnosis(self):
        stream = io.StringIO()
        with ErrorHandler(fatal=False, stream=stream):
            raise ModuleError("'{}' could not be opened", "/nope.zr", diagnosis=False)
        self.assertEqual("error: '/nope.zr' could not be opened\n", stream.getvalue())


if __name__ == '__main__':
    unittest.main()
