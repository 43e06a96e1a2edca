import unittest
from unittest import mock

from lambdacalc.lang.error import ErrorHandler
from lambdacalc.lang.session import Session
from lambdacalc.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.output = []
        self.shell = Shell(Session(ErrorHandler(out=self.output.append)), out=self.output.append)

    def send(self, line):
        self.output.clear()
        return self.shell.onecmd(self.shell.precmd(line))

    def test_precmd(self):
        cases = {":help": "help", ":def x y": "def x y", "EOF": "eval EOF", "x y": "eval x y", "\\x.x": "eval \\x.x"}
        for case, result in cases.items():
            self.assertEqual(result, self.shell.precmd(case), case)

    def test_eval(self):
        cases = {"(\\x.x) y": ["y"], "SUCC 1": ["(λf.(λx.f (f x))) = 2"], "  ": [], ";; comment": []}
        for case, result in cases.items():
            self.send(case)
            self.assertEqual(result, self.output, case)

        self.send("id := \\x.x")
        self.assertEqual([], self.output)
        self.send("id z")
        self.assertEqual(["z"], self.output)

    def test_continuation(self):
        self.send("(\\x.")
        self.assertEqual([], self.output)
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.send("  x) y")
        self.assertEqual(["y"], self.output)
        self.assertEqual("λ> ", self.shell.prompt)

    def test_errors(self):
        should_fail = ["x $", "(\\x.x x) (\\x.x x)", "x)", ":def f f"]
        for case in should_fail:
            self.assertFalse(self.send(case), case)
            self.assertTrue(any("error: " in line for line in self.output), case)

        self.send("(\\x.x) y")
        self.assertEqual(["y"], self.output)

    def test_def(self):
        self.send(":def two SUCC 1")
        self.assertEqual(["Defined two = SUCC 1"], self.output)
        self.send("two")
        self.assertEqual(["(λf.(λx.f (f x))) = 2"], self.output)

        for case in [":def", ":def two"]:
            self.send(case)
            self.assertEqual(["Usage: :def <name> <expression>"], self.output, case)

    def test_defs(self):
        self.send(":def two SUCC 1")
        self.send(":defs")
        self.assertEqual("Defined terms:", self.output[0])
        self.assertIn("  I = (λx.x)", self.output)
        self.assertIn("two", self.output[-1])

    def test_steps(self):
        self.send(":steps (\\x.\\y.x) a b")
        self.assertEqual(["Evaluation steps:", "  0: (λx.(λy.x)) a b", "  1: (λy.a) b", "  2: a"], self.output)

        self.send(":steps")
        self.assertEqual(["Usage: :steps <expression>"], self.output)

    def test_clear(self):
        self.send(":def two SUCC 1")
        self.send(":clear")
        self.assertEqual(["All user definitions cleared."], self.output)
        self.assertNotIn("two", self.shell.sess.namespace)

    def test_help(self):
        self.send(":help")
        self.assertIn("Commands:", self.output[0])

    def test_unknown(self):
        self.send(":foo")
        self.assertEqual(["Unknown command: ':foo'. Type ':help' for a list of commands."], self.output)

    def test_quit(self):
        for case in [":quit", ":exit"]:
            self.assertTrue(self.send(case), case)
        self.assertTrue(self.shell.onecmd("EOF"))

    def test_eof_variable(self):
        self.assertFalse(self.send("EOF"))
        self.assertEqual(["EOF"], self.output)
        self.send("(\\x.x) EOF")
        self.assertEqual(["EOF"], self.output)

    def test_cmdloop(self):
        lines = ["(\\x.x) y", "EOF", ":def two SUCC 1", "two", EOFError]
        with mock.patch("builtins.input", side_effect=lines):
            self.shell.cmdloop()

        self.assertEqual(Shell.intro, self.output[0])
        self.assertEqual(["y", "EOF", "Defined two = SUCC 1", "(λf.(λx.f (f x))) = 2", ""], self.output[1:])

        with mock.patch("builtins.input", side_effect=[":quit", "never read"]) as read:
            self.shell.cmdloop(intro="")
        self.assertEqual(1, read.call_count)


if __name__ == '__main__':
    unittest.main()
