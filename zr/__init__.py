"""zr language interpreter.

Basic program flow:
    1. Lexer: produces tokens on demand from source text (zr/lang/lexical.py)
    2. Parser: builds an abstract syntax tree by recursive descent over those tokens (zr/lang/parser.py)
        - all binary operators share one precedence level and group to the right
    3. Session: follows loadin directives first, recursively, then hands the rest of the file to the evaluator
       (zr/lang/session.py)
    4. Evaluator: walks the syntax tree, reading and writing the symbol table and printing to stdout
       (zr/lang/evaluator.py)

Any error at any stage is fatal: it is raised as a GenericException and reported by ErrorHandler (zr/lang/error.py).
"""
