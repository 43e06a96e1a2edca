"""Error handling for lambdacalc. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The core (lexer, parser, reducer) only ever raises the exceptions defined here. Displaying them is left to
ErrorHandler, which is used by the command-line entry point and the interactive shell.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lambdacalc error/warning. exprs[0] should
    be the offending expr; start and end mark the offending span within it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = list(exprs)
        self.msg = msg.format(*self.exprs)
        self.expr = self.exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def highlighted(self):
        """Returns self.msg with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class LexError(GenericException):
    """Raised when a character of the input matches none of the token shapes. position is a character offset into the
    trimmed text, not a byte offset: a preceding 'λ' counts as one position although it is two bytes in UTF-8.
    """

    def __init__(self, char, position, text=""):
        self.char = char
        self.position = position

        msg = "unexpected character '{1}' at position " + str(position)
        super().__init__(msg, [text, char], start=position, end=position + 1, diagnosis=bool(text))


class ParseError(GenericException):
    """Raised when the token stream does not match the grammar. Carries the offending token and what was expected
    instead.
    """

    def __init__(self, token, expected, text=""):
        self.token = token
        self.expected = expected

        msg = f"{expected}, got {token.type.value} at position {token.position}"
        end = token.position + max(len(token.lexeme), 1)
        super().__init__(msg, text, start=token.position, end=end, diagnosis=bool(text))


class NonTermination(GenericException):
    """Raised when reduction does not reach a normal form within the step budget."""

    def __init__(self, max_steps):
        self.max_steps = max_steps

        msg = f"evaluation exceeded maximum steps ({max_steps}), possible non-terminating expression"
        super().__init__(msg, diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress lambdacalc errors and print them instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, out=print):
        self.fatal = fatal
        self.out = out
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful Session add."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args."""
        error = GenericException(*args, **kwargs)

        self.out(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.highlighted())
        if not error.internal and error.expr and error.diagnosis:
            self.out(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Prints error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.highlighted()
        self.out(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self.out(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is RecursionError:
            self.throw(GenericException("normal form might exist, but maximum recursion depth exceeded"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            return False

        return True
