import unittest

from zr.lang.error import LexicalError
from zr.lang.lexical import Lexer, TokenKind


def kinds(source):
    return [token.kind for token in Lexer(source)]


class LexerTestCase(unittest.TestCase):

    def test_keywords_and_identifiers(self):
        cases = {
            "let": TokenKind.LET, "loadin": TokenKind.LOADIN, "int32": TokenKind.INT32, "string": TokenKind.STRING_TYPE,
            "true": TokenKind.TRUE, "while": TokenKind.WHILE, "letter": TokenKind.IDENT, "_x1": TokenKind.IDENT,
            "Let": TokenKind.IDENT,
        }
        for case, expected in cases.items():
            self.assertEqual([expected, TokenKind.EOF], kinds(case), case)

    def test_operators(self):
        cases = {
            "= ==": [TokenKind.ASSIGN, TokenKind.EQEQ],
            "< <= > >=": [TokenKind.LT, TokenKind.LTEQ, TokenKind.GT, TokenKind.GTEQ],
            "! != && ||": [TokenKind.BANG, TokenKind.NOTEQ, TokenKind.AND_AND, TokenKind.OR_OR],
            "+-*/(){};,:": [TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.LPAREN,
                            TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.SEMICOLON,
                            TokenKind.COMMA, TokenKind.COLON],
            "a<=b": [TokenKind.IDENT, TokenKind.LTEQ, TokenKind.IDENT],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenKind.EOF], kinds(case), case)

    def test_numbers(self):
        cases = {"42": "42", "3.14": "3.14", "007": "007", "9000000000000000000": "9000000000000000000"}
        for case, expected in cases.items():
            token = Lexer(case).next_token()
            self.assertEqual(TokenKind.NUMBER, token.kind, case)
            self.assertEqual(expected, token.text, case)

    def test_number_dot_not_followed_by_digit(self):
        lexer = Lexer("1.")
        self.assertEqual("1", lexer.next_token().text)
        self.assertRaises(LexicalError, lexer.next_token)

    def test_second_dot_is_not_consumed(self):
        lexer = Lexer("1.2.3")
        self.assertEqual("1.2", lexer.next_token().text)
        self.assertRaises(LexicalError, lexer.next_token)

    def test_strings(self):
        token = Lexer("\"hello world\"").next_token()
        self.assertEqual(TokenKind.STRING, token.kind)
        self.assertEqual("hello world", token.text)

        self.assertEqual("", Lexer("\"\"").next_token().text)

    def test_comments_and_whitespace(self):
        source = "// comment\n  // another\n\tlet x // trailing\n= 1"
        self.assertEqual([TokenKind.LET, TokenKind.IDENT, TokenKind.ASSIGN, TokenKind.NUMBER, TokenKind.EOF],
                         kinds(source))
        self.assertEqual([TokenKind.EOF], kinds("// only a comment"))
        self.assertEqual([TokenKind.SLASH, TokenKind.NUMBER, TokenKind.EOF], kinds("/ 2"))

    def test_positions(self):
        tokens = list(Lexer("let x\n  = 10;"))
        positions = [(token.line, token.column) for token in tokens]
        self.assertEqual([(1, 1), (1, 5), (2, 3), (2, 5), (2, 7), (2, 8)], positions)

    def test_errors(self):
        should_raise = ["\"unterminated", "\"line\nbreak\"", "a & b", "a | b", "@", "#", "x = 1 $", "é"]
        for case in should_raise:
            self.assertRaises(LexicalError, list, Lexer(case))

    def test_error_position(self):
        with self.assertRaises(LexicalError) as cm:
            list(Lexer("let x = 1;\nlet y = $;"))
        self.assertEqual((2, 9), (cm.exception.line, cm.exception.column))
        self.assertIn("unexpected character", str(cm.exception))

    def test_pull_model(self):
        lexer = Lexer("print 1")
        self.assertEqual(TokenKind.PRINT, lexer.next_token().kind)
        self.assertEqual(TokenKind.NUMBER, lexer.next_token().kind)
        self.assertEqual(TokenKind.EOF, lexer.next_token().kind)
        self.assertEqual(TokenKind.EOF, lexer.next_token().kind)


if __name__ == '__main__':
    unittest.main()
