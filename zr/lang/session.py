"""Session control for the zr language. A Session is the interpreter context: it owns the symbol table, the registry
of loaded modules and the evaluator, and runs the lex -> parse -> evaluate pipeline for the main file, for every
module it loads and for lines typed in command-line mode.
"""

import logging
import os

from zr.lang.error import ModuleError
from zr.lang.evaluator import Evaluator
from zr.lang.lexical import Lexer
from zr.lang.nodes import Block, LoadModule
from zr.lang.parser import Parser
from zr.lang.source import FileSourceProvider
from zr.lang.values import SymbolTable


logger = logging.getLogger(__name__)


class Session:
    """Governs a zr session: one symbol table and one module registry shared by every file it runs."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, provider=None, output=None, scoped=False):
        self.error_handler = error_handler
        self.provider = provider if provider is not None else FileSourceProvider()

        self.symbols = SymbolTable(scoped)
        self.evaluator = Evaluator(self.symbols, output)

        self.modules = set()  # canonical paths of modules loaded or being loaded
        self.main_dir = None  # directory of main script, parent of the "files" module directory

    def run(self, path):
        """Runs main script at path. Any error is raised."""
        path = self.provider.canonical(os.path.abspath(path))
        if not self.provider.exists(path):
            raise ModuleError("'{}' could not be opened", path, diagnosis=False)

        self.main_dir = os.path.dirname(path)
        self.modules.add(path)
        return self.process(self.provider.read(path), path)

    def execute(self, source):
        """Runs source typed in command-line mode. Any error is raised; state from earlier lines is kept."""
        if self.main_dir is None:
            self.main_dir = os.getcwd()
        return self.process(source, Session.SH_FILE, base_dir=os.getcwd())

    def process(self, source, identity, base_dir=None):
        """Parses source (whose canonical path is identity), loads all of its loadin directives in order, then
        evaluates the rest of its statements as a single block. Returns value of the last statement.
        """
        if base_dir is None:
            base_dir = os.path.dirname(identity)

        self.error_handler.register_file(identity, source)
        logger.info("processing '%s'", identity)

        program = Parser(Lexer(source)).parse_program()

        body = Block(line=program.line, column=program.column)
        for statement in program.statements:
            if isinstance(statement, LoadModule):
                self.load_module(statement, identity, base_dir)
            else:
                body.statements.append(statement)

        value = self.evaluator.run(body.statements)

        self.error_handler.remove_file(identity)
        return value

    def load_module(self, statement, identity, base_dir):
        """Resolves and runs the module named by a LoadModule statement found in identity."""
        self.error_handler.register_line(identity, statement.line)  # in case error is raised

        path = self.provider.resolve(statement.name, base_dir, self.main_dir, at=statement)
        if path in self.modules:
            raise ModuleError("module '{}' already loaded or circular dependency", statement.name, at=statement)

        self.modules.add(path)
        try:
            self.process(self.provider.read(path), path)
        except Exception:
            if not self.error_handler.fatal:  # command-line mode: module may be fixed and loaded again
                self.modules.discard(path)
            raise

        self.error_handler.remove_line(identity)  # error was not raised
