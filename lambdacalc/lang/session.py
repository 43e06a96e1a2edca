"""Session control for the lang layer. Implementation of statement handling to run the lambdacalc interpreter, either
in command line mode or file interpretation mode.

All grammar can be loosely defined as follows:

```
<named_func>  ::= <variable> ":=" <λ-term>   ; binds <λ-term> to <variable> for later statements
<exec_stmt>   ::= <λ-term>                   ; reduced to normal form, result is outputted
<comment>     ::= ";;" <char>*
```

Natural numbers may be used anywhere a λ-term is expected and stand for their Church numerals. Named funcs are
expanded when they are bound, so a definition always refers to the definitions that existed at that point.
"""

from lambdacalc.interpreter import LambdaCalculus
from lambdacalc.lang.error import GenericException
from lambdacalc.lang.numerical import cnumberify, number
from lambdacalc.pure.lexical import Lexer, TokenType
from lambdacalc.pure.reducer import is_free, render, substitute


class Session:
    """Governs a lambdacalc session, with control over scope of named funcs."""
    SH_FILE = "<in>"  # command-line interpreter filename
    PRELUDE = {
        # Church booleans
        "true": "λx.λy.x",
        "false": "λx.λy.y",
        "and": "λp.λq.p q p",
        "or": "λp.λq.p p q",
        "not": "λp.λa.λb.p b a",
        # combinators
        "I": "λx.x",
        "K": "λx.λy.x",
        "S": "λx.λy.λz.x z (y z)",
        "Y": "λf.(λx.f (x x)) (λx.f (x x))",
        # Church arithmetic
        "SUCC": "λn.λf.λx.f (n f x)",
        "PLUS": "λm.λn.λf.λx.m f (n f x)",
        "MULT": "λm.λn.λf.m (n f)",
    }

    def __init__(self, error_handler, path=SH_FILE, calculus=None, cmd_line=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.calculus = calculus if calculus is not None else LambdaCalculus()

        self.namespace = {}  # dict of name: expanded λ-term, in order of definition
        self.to_exec = []    # list of (line num, expr, λ-term) to execute
        self.results = []    # normal forms of executed statements
        self.traces = []     # rendered reduction steps of executed statements, if requested

        if self.cmd_line:
            self.error_handler.fatal = False

        self.load_prelude()

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    exprs = Session.preprocess_lines(file)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for line_num, expr in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line):
        """Removes comments and surrounding whitespace from line."""
        if ";;" in line:
            line = line[:line.index(";;")]  # get rid of comments
        return line.strip()

    @staticmethod
    def preprocess_lines(lines):
        """Returns list of (line num, expr) from lines, skipping blank lines. A line with unclosed parentheses is
        continued on the following lines; its line num is the one it started on.
        """
        exprs = []
        pending, start = "", None

        for line_num, line in enumerate(lines, start=1):
            line = Session.preprocess_line(line)
            if not line and not pending:
                continue

            if not pending:
                start = line_num
            pending = f"{pending} {line}".strip()

            if pending.count("(") <= pending.count(")"):
                exprs.append((start, pending))
                pending = ""

        if pending:
            exprs.append((start, pending))
        return exprs

    def load_prelude(self):
        for name, expr in Session.PRELUDE.items():
            self.namespace[name] = self.calculus.parse(expr)

    def clear(self):
        """Removes all user definitions. The prelude is kept."""
        self.namespace = {}
        self.load_prelude()

    def parse(self, expr):
        """Returns expanded λ-term of expr."""
        return self.expand(self.calculus.parse(cnumberify(expr)))

    def expand(self, tree):
        """Substitutes every named func that is free in tree with its λ-term, until none is left."""
        expanded = True
        while expanded:
            expanded = False
            for name, definition in self.namespace.items():
                if is_free(name, tree):
                    tree = substitute(tree, name, definition)
                    expanded = True
        return tree

    def define(self, name, expr):
        """Binds the λ-term expr to name. Raises a GenericException if name is not a variable or if the definition is
        recursive.
        """
        name = name.strip()
        tokens = Lexer(name).tokenize()
        if len(tokens) != 2 or tokens[0].type is not TokenType.VARIABLE:
            raise GenericException("'{}' is not a valid variable name", name)

        tree = self.calculus.parse(cnumberify(expr))
        expanded = self.expand(tree)
        if is_free(name, tree) or is_free(name, expanded):
            raise GenericException("recursive definitions not supported", expr.strip(), diagnosis=False)

        if name in Session.PRELUDE:
            self.error_handler.warn("'{}' shadows a prelude definition", name, diagnosis=False)

        self.namespace[name] = expanded
        return expanded

    def add(self, expr, line_num=None):
        """Adds a statement to the current session. Named funcs are bound immediately; reduction of executable
        statements is delayed until run is called.
        """
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        if ":=" in expr:
            name, __, body = expr.partition(":=")
            self.define(name, body)
        else:
            self.to_exec.append((line_num, expr, self.parse(expr)))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self, with_steps=False):
        """Runs this session's executable statements by beta-reducing them. Will raise any errors that are
        encountered. If with_steps, the rendered steps of each reduction are kept in self.traces.
        """
        while self.to_exec:
            line_num, expr, tree = self.to_exec.pop(0)
            self.error_handler.register_line(self.path, expr, line_num)

            if with_steps:
                result, steps = self.calculus.reducer.trace(tree)
                self.traces.append(steps)
            else:
                result = self.calculus.reducer.evaluate(tree)
            self.results.append(result)

            self.error_handler.remove_line(self.path)

    def steps(self, expr):
        """Returns the rendered form of expr before and after every reduction step."""
        __, steps = self.calculus.reducer.trace(self.parse(expr))
        return steps

    def pop(self):
        """Removes the oldest result and returns its display form."""
        return Session.show(self.results.pop(0))

    @staticmethod
    def show(tree):
        """Rendered tree, plus the number it encodes if it is a Church numeral."""
        num = number(tree)
        if num is None:
            return render(tree)
        return f"{render(tree)} = {num}"
