"""Error handling for the zr language. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every zr error is fatal to the file being run. ErrorHandler is the only place where an error is turned into a
diagnostic and an exit status; everything below it simply raises.
"""

import logging
import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a zr error. msg is a format string whose {} fields
    are filled in with exprs (bolded when displayed). at is the token or node the error points to: anything with line
    and column attributes.
    """

    def __init__(self, msg, exprs=None, at=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error

        self.line = getattr(at, "line", None)
        self.column = getattr(at, "column", None)

        self.diagnosis = diagnosis
        self.internal = internal


class LexicalError(GenericException):
    """Invalid character or unterminated string literal."""


class ParseError(GenericException):
    """Unexpected token, malformed statement or mismatched delimiters."""


class TypeMismatchError(GenericException):
    """Incompatible operand types, declared-vs-actual type mismatch in let, or non-bool condition."""


class RuntimeValueError(GenericException):
    """Division by zero, out-of-range literal or conversion, integer overflow, undefined variable."""


class ModuleError(GenericException):
    """Unresolvable, unreadable, duplicate or circular loadin target."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom zr errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.traceback = {}  # dict of path: (line, line_num), insertion-ordered from main file to innermost module
        self.sources = {}    # dict of path: list of source lines, used for diagnoses

    def register_file(self, path, source=""):
        """Registers path (and its text) in traceback. Should be called before the file is parsed."""
        self.traceback[path] = (None, None)
        self.sources[path] = source.splitlines()

    def register_line(self, path, line_num):
        """Registers the line being processed in path, e.g. a loadin directive that is being followed."""
        lines = self.sources.get(path, [])
        line = lines[line_num - 1].strip() if 0 < line_num <= len(lines) else ""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful loadin."""
        self.traceback[path] = (None, None)

    def remove_file(self, path):
        """Removes path from traceback once it has run to completion."""
        self.traceback.pop(path, None)
        self.sources.pop(path, None)

    def diagnose(self, error, path):
        """Returns the offending source line with the error position highlighted and bolded, or None if the error
        has no usable position.
        """
        lines = self.sources.get(path, [])
        if error.line is None or not 0 < error.line <= len(lines):
            return None

        text = lines[error.line - 1]
        start = max(error.column - 1, 0)
        end = start + len(error.expr) if error.expr and text.startswith(error.expr, start) else start + 1

        diagnosis = "  " + text[:start]
        diagnosis += colored(text[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += text[end:] + "\n"

        diagnosis += "  " + "".join(char if char == "\t" else " " for char in text[:start])
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        stream = self.stream if self.stream is not None else sys.stderr

        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines:
            error_msg = "Traceback:\n" + error_msg

        path = next(reversed(self.traceback), None)
        if path is not None and error.line is not None:
            error_msg += colored(f"{path}:{error.line}:{error.column}: ", attrs=["bold"])
        elif path is not None:
            error_msg += colored(f"{path}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=stream)

        if not error.internal and error.diagnosis and path is not None:
            diagnosis = self.diagnose(error, path)
            if diagnosis:
                print(diagnosis, file=stream)

        stream.flush()

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)
        self.sources = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum nesting depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit


class ColoredFormatter(logging.Formatter):
    """Log formatter that colors the level name the same way errors are colored."""
    COLORS = {"DEBUG": "cyan", "INFO": "green", "WARNING": "magenta", "ERROR": "red", "CRITICAL": "red"}

    def format(self, record):
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = colored(record.levelname, self.COLORS.get(record.levelname), attrs=["bold"])
        return super().format(record)
