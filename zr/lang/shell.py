"""Handles interactive/command-line mode for zr interpreter. Uses cmd as backend."""

import cmd

from zr.lang.lexical import Lexer
from zr.lang.parser import Parser


class Shell(cmd.Cmd):
    """zr interpreter shell."""
    intro = "zr interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False

        self._tmp_line = ""

    @staticmethod
    def open_braces(text):
        """Returns number of '{' minus number of '}' in text, ignoring string literals and comments."""
        depth = 0
        for line in text.split("\n"):
            for idx, segment in enumerate(line.split("\"")):
                if idx % 2:
                    continue  # inside "..."
                code, comment, __ = segment.partition("//")
                depth += code.count("{") - code.count("}")
                if comment:
                    break
        return depth

    @staticmethod
    def preprocess_line(line, tmp_line=""):
        """Joins line to any unfinished previous input. Returns updated line and whether or not a continuation is
        needed (more '{' than '}' so far).
        """
        if tmp_line:
            line = tmp_line + "\n" + line
        return line, Shell.open_braces(line) > 0

    def default(self, line):
        """Executes arbitrary zr statements."""
        line, add_to_prev = self.preprocess_line(line, self._tmp_line)

        if add_to_prev:
            self._tmp_line = line
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.execute(line)

    def do_ast(self, arg):
        """Displays the syntax tree of a statement without running it: ast <statement>"""
        with self.sess.error_handler:
            self.sess.error_handler.register_file(self.sess.SH_FILE, arg)
            print(Parser(Lexer(arg)).parse_program().display(), file=self.stdout)
            self.sess.error_handler.remove_file(self.sess.SH_FILE)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the zr interpreter!\n\n"
              "Statements are run as soon as they are entered, and variables persist between\n"
              "lines. Blocks ({ ... }) may span several lines.\n\n"
              "Try it out by typing 'let x: int32 = 40'. Next, try typing 'print x + 2'.\n"
              "'loadin \"name\"' runs the module name.zr from the current directory (or\n"
              "its files/ directory). 'ast <statement>' shows how a statement is parsed.",
              file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
