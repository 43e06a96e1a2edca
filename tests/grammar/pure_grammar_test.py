import unittest

from lambdacalc.grammar.pure import Parser
from lambdacalc.lang.error import ParseError
from lambdacalc.pure.lexical import Lexer, TokenType
from lambdacalc.term import Abstraction, Application, Variable


def parse(text):
    lexer = Lexer(text)
    return Parser(lexer.tokenize(), lexer.text).parse()


x, y, z = Variable("x"), Variable("y"), Variable("z")


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "x": x,
            "(x)": x,
            "((x))": x,
            "x y": Application(x, y),
            "x y z": Application(Application(x, y), z),
            "x (y z)": Application(x, Application(y, z)),
            "\\x.x": Abstraction("x", x),
            "λx.x": Abstraction("x", x),
            "\\x.x y": Abstraction("x", Application(x, y)),
            "\\x.\\y.x y": Abstraction("x", Abstraction("y", Application(x, y))),
            "(\\x.x) y": Application(Abstraction("x", x), y),
            "x \\y.y z": Application(x, Abstraction("y", Application(y, z))),
            "(\\x.x) (\\y.y) z": Application(Application(Abstraction("x", x), Abstraction("y", y)), z),
            "\\f.\\x.f (f x)": Abstraction("f", Abstraction("x", Application(Variable("f"),
                                                                             Application(Variable("f"), x)))),
        }
        for case, result in cases.items():
            self.assertEqual(result, parse(case), case)

    def test_deterministic(self):
        cases = ["\\x.\\y.x y", "(\\x.x x) (\\x.x x)", "a b (c d) \\e.e"]
        for case in cases:
            self.assertEqual(parse(case), parse(case), case)

    def test_deep_nesting(self):
        depth = 5000
        self.assertEqual(x, parse("(" * depth + "x" + ")" * depth))

        tree = parse("\\x." * depth + "x")
        self.assertEqual("(λx." * depth + "x" + ")" * depth, str(tree))

        tree = parse("f (" * depth + "x" + ")" * depth)
        for __ in range(depth):
            self.assertEqual(Variable("f"), tree.left)
            tree = tree.right
        self.assertEqual(x, tree)

        self.assertRaises(ParseError, parse, "(" * depth + "x" + ")" * (depth - 1))

    def test_parse_error(self):
        should_raise = ["", "(x", "x)", "\\.x", "\\x x", "\\x.", ")", "x . y", "()", "\\(x).x", "x ((y)"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

    def test_parse_error_token(self):
        cases = {
            "(x": (TokenType.EOF, 2, "')'"),
            "\\x x": (TokenType.VARIABLE, 3, "'.'"),
            "\\.x": (TokenType.DOT, 1, "parameter"),
            "x)": (TokenType.RPAREN, 1, "end of input"),
            "": (TokenType.EOF, 0, "variable"),
        }
        for case, (token_type, position, expected) in cases.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertEqual(token_type, context.exception.token.type, case)
            self.assertEqual(position, context.exception.token.position, case)
            self.assertIn(expected, context.exception.expected, case)


if __name__ == '__main__':
    unittest.main()
