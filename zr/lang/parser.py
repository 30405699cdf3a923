"""Recursive-descent parser for the zr language, with one token of lookahead.

Grammar can be loosely defined as follows:

```
<program>     ::= <statement>*
<statement>   ::= (<let_stmt> | <if_stmt> | <print_stmt> | <loadin_stmt> | <block> | <expression>) ";"?

<let_stmt>    ::= "let" <ident> (":" <type_name>)? "=" <expression>
<type_name>   ::= "int" | "int32" | "int64" | "float" | "bool" | "string"     ; int is int64
<if_stmt>     ::= "if" "(" <expression> ")" <block> ("else" <block>)?
<print_stmt>  ::= "print" <expression>
<loadin_stmt> ::= "loadin" <string>
<block>       ::= "{" <statement>* "}"

<expression>  ::= <primary> (<binop> <expression>)?
<binop>       ::= "+" | "-" | "*" | "/" | ">" | "<" | "=" | "==" | "<=" | ">=" | "!=" | "&&" | "||"
<primary>     ::= <ident> | <number> | <string> | "true" | "false" | "(" <expression> ")"
```

Note that all binary operators share one precedence level and that the right-hand side of every operator is a whole
expression, so operators group to the right: `2 * 3 + 4` is `2 * (3 + 4)`.
"""

import logging

from zr.lang.error import ParseError
from zr.lang.lexical import TokenKind
from zr.lang.nodes import (Block, BinaryOp, BoolLiteral, Identifier, If, Let, LoadModule, NumberLiteral, Print,
                           StringLiteral)
from zr.lang.values import ValueType


logger = logging.getLogger(__name__)


BINARY_OPS = {
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.GT, TokenKind.LT, TokenKind.ASSIGN,
    TokenKind.EQEQ, TokenKind.LTEQ, TokenKind.GTEQ, TokenKind.NOTEQ, TokenKind.AND_AND, TokenKind.OR_OR,
}

TYPE_NAMES = {
    TokenKind.INT: ValueType.INT64,
    TokenKind.INT32: ValueType.INT32,
    TokenKind.INT64: ValueType.INT64,
    TokenKind.FLOAT: ValueType.FLOAT,
    TokenKind.BOOL: ValueType.BOOL,
    TokenKind.STRING_TYPE: ValueType.STRING,
}


class Parser:
    """Builds an AST from the tokens of a Lexer. Every syntax error raises ParseError: there is no recovery."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = lexer.next_token()

    def advance(self):
        """Consumes current_token and returns it."""
        token = self.current_token
        self.current_token = self.lexer.next_token()
        return token

    def check(self, kind):
        return self.current_token.kind is kind

    def expect(self, kind, msg):
        """Consumes current_token if it is of kind, else raises ParseError with msg."""
        if not self.check(kind):
            self.error(msg)
        return self.advance()

    def error(self, msg):
        token = self.current_token
        msg = msg.replace("{", "{{").replace("}", "}}")
        raise ParseError(msg + ", got '{}'", str(token), at=token)

    @staticmethod
    def _pos(token):
        return {"line": token.line, "column": token.column}

    def parse_program(self):
        """Parses the whole token stream into a top-level Block."""
        program = Block(**self._pos(self.current_token))
        while not self.check(TokenKind.EOF):
            program.statements.append(self.parse_statement())

        logger.debug("parsed %d top-level statements", len(program.statements))
        return program

    def parse_statement(self):
        kind = self.current_token.kind
        if kind is TokenKind.LET:
            statement = self.parse_let()
        elif kind is TokenKind.IF:
            statement = self.parse_if()
        elif kind is TokenKind.PRINT:
            statement = self.parse_print()
        elif kind is TokenKind.LOADIN:
            statement = self.parse_loadin()
        elif kind is TokenKind.LBRACE:
            statement = self.parse_block()
        else:
            statement = self.parse_expression()

        if self.check(TokenKind.SEMICOLON):
            self.advance()
        return statement

    def parse_let(self):
        let = self.advance()
        name = self.expect(TokenKind.IDENT, "expected variable name after 'let'")

        declared_type = None
        if self.check(TokenKind.COLON):
            self.advance()
            if self.current_token.kind not in TYPE_NAMES:
                self.error("expected type name after ':'")
            declared_type = TYPE_NAMES[self.advance().kind]

        self.expect(TokenKind.ASSIGN, f"expected '=' in let statement for '{name.text}'")
        return Let(name.text, declared_type, self.parse_expression(), **self._pos(let))

    def parse_if(self):
        if_token = self.advance()
        self.expect(TokenKind.LPAREN, "expected '(' after 'if'")
        condition = self.parse_expression()
        self.expect(TokenKind.RPAREN, "expected ')' after if condition")

        then_body = self.parse_block()
        else_body = None
        if self.check(TokenKind.ELSE):
            self.advance()
            else_body = self.parse_block()

        return If(condition, then_body, else_body, **self._pos(if_token))

    def parse_print(self):
        print_token = self.advance()
        return Print(self.parse_expression(), **self._pos(print_token))

    def parse_loadin(self):
        loadin = self.advance()
        name = self.expect(TokenKind.STRING, "expected module name string after 'loadin'")
        return LoadModule(name.text, **self._pos(loadin))

    def parse_block(self):
        brace = self.expect(TokenKind.LBRACE, "expected '{'")
        block = Block(**self._pos(brace))
        while not self.check(TokenKind.RBRACE):
            if self.check(TokenKind.EOF):
                self.error("expected '}' to close block")
            block.statements.append(self.parse_statement())

        self.advance()
        return block

    def parse_expression(self):
        """Reads primary (binop primary)* in one loop, then folds it from the right, so that long operator chains do
        not nest Python calls.
        """
        operands = [self.parse_primary()]
        operators = []
        while self.current_token.kind in BINARY_OPS:
            operators.append(self.advance())
            operands.append(self.parse_primary())

        expression = operands.pop()
        while operators:
            op = operators.pop()
            expression = BinaryOp(op.text, operands.pop(), expression, **self._pos(op))
        return expression

    def parse_primary(self):
        token = self.current_token
        kind = token.kind

        if kind is TokenKind.IDENT:
            return Identifier(self.advance().text, **self._pos(token))
        elif kind is TokenKind.NUMBER:
            return NumberLiteral(self.advance().text, **self._pos(token))
        elif kind is TokenKind.STRING:
            return StringLiteral(self.advance().text, **self._pos(token))
        elif kind in (TokenKind.TRUE, TokenKind.FALSE):
            self.advance()
            return BoolLiteral(kind is TokenKind.TRUE, **self._pos(token))
        elif kind is TokenKind.LPAREN:
            self.advance()
            expression = self.parse_expression()
            self.expect(TokenKind.RPAREN, "expected ')' to close '('")
            return expression

        self.error("expected expression")
