"""Handles interactive/command-line mode for lambdacalc interpreter. Uses cmd as backend.

Lines starting with ':' are shell commands (':help', ':def', ':steps', ...); anything else is a lang statement.
"""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: Python backend\nType ':help' for more information or ':quit' to exit."
    prompt = "λ> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "λ> "      # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, out=print, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.out = out

        self._tmp_line = ""
        self.line_num = 0

    def cmdloop(self, intro=None):
        """Reads and runs lines until a command returns True. End of input runs do_EOF directly instead of passing an
        'EOF' line through precmd as cmd.Cmd does, so a typed 'EOF' stays a variable.
        """
        self.preloop()
        self.out(self.intro if intro is None else intro)

        stop = False
        while not stop:
            try:
                line = input(self.prompt)
            except EOFError:
                stop = self.onecmd("EOF")
            else:
                stop = self.postcmd(self.onecmd(self.precmd(line)), line)

        self.postloop()

    def precmd(self, line):
        """Routes ':command' lines to do_command and everything else to do_eval."""
        if line.startswith(":"):
            return line.lstrip(":")
        return f"eval {line}"

    def onecmd(self, line):
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            return super().onecmd(line)

    def default(self, line):
        self.out(f"Unknown command: ':{line}'. Type ':help' for a list of commands.")

    def do_eval(self, line):
        """Executes arbitrary lang statement."""
        self.line_num += 1
        line = self.sess.preprocess_line(line)
        if self._tmp_line:
            line = f"{self._tmp_line} {line}".strip()

        if line.count("(") > line.count(")"):
            self._tmp_line = line
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        if not line:
            return

        self.sess.add(line, self.line_num)
        self.sess.run()

        while self.sess.results:
            self.out(self.sess.pop())

    def do_def(self, arg):
        """:def NAME TERM  binds TERM to NAME."""
        name, __, expr = arg.strip().partition(" ")
        if not name or not expr.strip():
            self.out("Usage: :def <name> <expression>")
            return

        self.sess.define(name, expr)
        self.out(f"Defined {name} = {expr.strip()}")

    def do_defs(self, arg):
        """:defs  lists all definitions."""
        self.out("Defined terms:")
        for name, tree in self.sess.namespace.items():
            self.out(f"  {name} = {tree}")

    def do_steps(self, arg):
        """:steps TERM  shows every reduction step of TERM."""
        if not arg.strip():
            self.out("Usage: :steps <expression>")
            return

        self.out("Evaluation steps:")
        for idx, step in enumerate(self.sess.steps(arg)):
            self.out(f"  {idx}: {step}")

    def do_clear(self, arg):
        """:clear  removes all user definitions."""
        self.sess.clear()
        self.out("All user definitions cleared.")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.out("Welcome to the lambdacalc interpreter!\n\n"
                 "Commands:\n"
                 "  :help              - show this help message\n"
                 "  :quit              - exit the interpreter\n"
                 "  :def <name> <expr> - define a named expression (or type 'name := expr')\n"
                 "  :defs              - list all definitions\n"
                 "  :steps <expr>      - show evaluation steps\n"
                 "  :clear             - clear all user definitions\n"
                 "  <expr>             - evaluate a lambda expression\n\n"
                 "Syntax: '\\x.e' or 'λx.e' for abstraction, 'e1 e2' for application, parentheses for grouping.\n"
                 "Try typing '(\\x.x) y', which applies the identity function to 'y', giving 'y' as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.out("")
        return self.do_quit(arg)

    def do_quit(self, arg):
        """Exits interpreter."""
        return True

    do_exit = do_quit
