import unittest

from lambdacalc import interpreter
from lambdacalc.interpreter import LambdaCalculus, Reduction
from lambdacalc.lang.error import LexError, NonTermination, ParseError
from lambdacalc.term import Abstraction, Application, Variable


class InterpreterTestCase(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(Application(Abstraction("x", Variable("x")), Variable("y")), interpreter.parse("(\\x.x) y"))
        self.assertEqual(interpreter.parse("\\x.x"), interpreter.parse("  λx.x \n"))

        self.assertRaises(LexError, interpreter.parse, "x # y")
        self.assertRaises(ParseError, interpreter.parse, "(x y")

    def test_evaluate(self):
        self.assertEqual(Variable("y"), interpreter.evaluate("(\\x.x) y"))
        self.assertEqual(interpreter.parse("\\f.\\x.f (f x)"),
                         interpreter.evaluate("(\\n.\\f.\\x.f (n f x)) (\\f.\\x.f x)"))

        should_raise = {"x $": LexError, "\\x": ParseError, "(\\x.x x) (\\x.x x)": NonTermination}
        for case, error in should_raise.items():
            self.assertRaises(error, interpreter.evaluate, case)

    def test_evaluate_max_steps(self):
        with self.assertRaises(NonTermination) as context:
            interpreter.evaluate("(\\f.(\\x.f (x x)) (\\x.f (x x))) (\\y.y)", max_steps=50)
        self.assertEqual(50, context.exception.max_steps)

    def test_evaluate_with_steps(self):
        reduction = interpreter.evaluate_with_steps("(\\x.\\y.x) a b")
        self.assertIsInstance(reduction, Reduction)
        self.assertEqual(Variable("a"), reduction.result)
        self.assertEqual(("(λx.(λy.x)) a b", "(λy.a) b", "a"), reduction.steps)

        self.assertRaises(NonTermination, interpreter.evaluate_with_steps, "(\\x.x x) (\\x.x x)", 10)

    def test_render(self):
        cases = {"\\x.x": "(λx.x)", "x y z": "x y z", "x (y z)": "x (y z)"}
        for case, result in cases.items():
            self.assertEqual(result, interpreter.render(interpreter.parse(case)), case)


class LambdaCalculusTestCase(unittest.TestCase):

    def test_max_steps(self):
        calculus = LambdaCalculus(max_steps=2)
        self.assertEqual(2, calculus.max_steps)
        self.assertEqual(1000, LambdaCalculus().max_steps)

        self.assertEqual(Variable("y"), calculus.evaluate("(\\x.x) y"))
        self.assertRaises(NonTermination, calculus.evaluate, "(\\x.x) ((\\y.y) z)")
        self.assertEqual(Variable("z"), calculus.evaluate("(\\x.x) ((\\y.y) z)", max_steps=3))

    def test_render(self):
        calculus = LambdaCalculus()
        self.assertEqual("(λy'.y)", calculus.render(calculus.evaluate("(\\x.\\y.x) y")))


if __name__ == '__main__':
    unittest.main()
