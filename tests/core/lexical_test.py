import unittest

from monkey.core.lexical import Lexer, Token, TokenKind


def kinds_and_literals(source):
    return [(token.kind, token.literal) for token in Lexer(source)]


class LexerTestCase(unittest.TestCase):

    def test_operators_and_delimiters(self):
        source = """
            =+(){},;
            !-/*5;
            5 < 10 > 5;
            10 == 10;
            10 != 9;
        """
        expected = [
            (TokenKind.ASSIGN, "="), (TokenKind.PLUS, "+"), (TokenKind.LPAREN, "("), (TokenKind.RPAREN, ")"),
            (TokenKind.LBRACE, "{"), (TokenKind.RBRACE, "}"), (TokenKind.COMMA, ","), (TokenKind.SEMICOLON, ";"),
            (TokenKind.BANG, "!"), (TokenKind.MINUS, "-"), (TokenKind.SLASH, "/"), (TokenKind.ASTERISK, "*"),
            (TokenKind.INT, "5"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, "5"), (TokenKind.LT, "<"), (TokenKind.INT, "10"), (TokenKind.GT, ">"),
            (TokenKind.INT, "5"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, "10"), (TokenKind.EQ, "=="), (TokenKind.INT, "10"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, "10"), (TokenKind.NOT_EQ, "!="), (TokenKind.INT, "9"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.EOF, "<EOF>"),
        ]
        self.assertEqual(expected, kinds_and_literals(source))

    def test_keywords_and_identifiers(self):
        source = """
        let add = fn(x, y) {
            x + y;
        };
        let result = add(5, 10);
        if (5 < 10) {
            return true;
        } else {
            return false;
        }
        """
        expected = [
            (TokenKind.LET, "let"), (TokenKind.IDENT, "add"), (TokenKind.ASSIGN, "="), (TokenKind.FUNCTION, "fn"),
            (TokenKind.LPAREN, "("), (TokenKind.IDENT, "x"), (TokenKind.COMMA, ","), (TokenKind.IDENT, "y"),
            (TokenKind.RPAREN, ")"), (TokenKind.LBRACE, "{"),
            (TokenKind.IDENT, "x"), (TokenKind.PLUS, "+"), (TokenKind.IDENT, "y"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.LET, "let"), (TokenKind.IDENT, "result"), (TokenKind.ASSIGN, "="), (TokenKind.IDENT, "add"),
            (TokenKind.LPAREN, "("), (TokenKind.INT, "5"), (TokenKind.COMMA, ","), (TokenKind.INT, "10"),
            (TokenKind.RPAREN, ")"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.IF, "if"), (TokenKind.LPAREN, "("), (TokenKind.INT, "5"), (TokenKind.LT, "<"),
            (TokenKind.INT, "10"), (TokenKind.RPAREN, ")"), (TokenKind.LBRACE, "{"),
            (TokenKind.RETURN, "return"), (TokenKind.TRUE, "true"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"), (TokenKind.ELSE, "else"), (TokenKind.LBRACE, "{"),
            (TokenKind.RETURN, "return"), (TokenKind.FALSE, "false"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"),
            (TokenKind.EOF, "<EOF>"),
        ]
        self.assertEqual(expected, kinds_and_literals(source))

    def test_identifier_runs(self):
        cases = {
            "foo_bar": [(TokenKind.IDENT, "foo_bar"), (TokenKind.EOF, "<EOF>")],
            "_": [(TokenKind.IDENT, "_"), (TokenKind.EOF, "<EOF>")],
            "letter": [(TokenKind.IDENT, "letter"), (TokenKind.EOF, "<EOF>")],
            "fnx": [(TokenKind.IDENT, "fnx"), (TokenKind.EOF, "<EOF>")],
            "x1": [(TokenKind.IDENT, "x"), (TokenKind.INT, "1"), (TokenKind.EOF, "<EOF>")],
            "12ab": [(TokenKind.INT, "12"), (TokenKind.IDENT, "ab"), (TokenKind.EOF, "<EOF>")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds_and_literals(case), case)

    def test_illegal(self):
        cases = {
            "@": [(TokenKind.ILLEGAL, "@"), (TokenKind.EOF, "<EOF>")],
            "a $ b": [(TokenKind.IDENT, "a"), (TokenKind.ILLEGAL, "$"), (TokenKind.IDENT, "b"),
                      (TokenKind.EOF, "<EOF>")],
            "λ": [(TokenKind.ILLEGAL, "λ"), (TokenKind.EOF, "<EOF>")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds_and_literals(case), case)

    def test_eof_is_idempotent(self):
        for case in ["", "   \n\t", "let x = 5;"]:
            lexer = Lexer(case)
            tokens = list(lexer)
            self.assertIs(TokenKind.EOF, tokens[-1].kind, case)

            for __ in range(5):
                self.assertEqual(Token(TokenKind.EOF, "<EOF>"), lexer.next_token(), case)

    def test_start_offsets(self):
        tokens = list(Lexer("let x == 10"))
        self.assertEqual([0, 4, 6, 9, 11], [token.start for token in tokens])
        self.assertEqual([3, 5, 8, 11, 12], [token.end for token in tokens])

    def test_offsets_do_not_affect_equality(self):
        self.assertEqual(Token(TokenKind.IDENT, "x", 0), Token(TokenKind.IDENT, "x", 42))
        self.assertNotEqual(Token(TokenKind.IDENT, "x"), Token(TokenKind.INT, "x"))


if __name__ == '__main__':
    unittest.main()
