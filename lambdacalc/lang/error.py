"""Error handling for the lambdacalc interpreter. Only GenericExceptions should be encountered during running: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Error kinds raised by the interpreter core:
    - LexicalError: unrecognized character in the input text
    - LambdaSyntaxError: token stream does not match the λ-term grammar
    - ReductionLimitError: normal-order reduction did not reach a normal form within the step budget
    - InvalidArgumentError: bad Church numeral/operator/argument count (arithmetic mode only)
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a lambdacalc error. msg is kept uncolored; coloring
    is done by ErrorHandler at display time.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)
        self.expr = self.exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def colored_msg(self):
        """Returns self.msg with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


def escape(text):
    """Escapes braces so that text can be used verbatim as a message template."""
    return text.replace("{", "{{").replace("}", "}}")


class LexicalError(GenericException):
    """Raised by the tokenizer on a character that cannot start any token."""

    def __init__(self, char, expr="", pos=0):
        self.char = char
        super().__init__("Unexpected character: " + escape(char), expr, start=pos, end=pos + 1)


class LambdaSyntaxError(GenericException):
    """Raised by the parser. msg is one of the fixed messages in grammar.pure."""

    def __init__(self, msg, expr="", pos=0):
        super().__init__(escape(msg), expr, start=pos, end=pos + 1)


class ReductionLimitError(GenericException):
    """Raised when no normal form was reached within the reduction step budget."""

    def __init__(self, steps, expr=""):
        self.steps = steps
        msg = "reduction limit reached after {} steps".format(steps)
        super().__init__(msg, expr, diagnosis=False)


class InvalidArgumentError(GenericException, ValueError):
    """Raised on negative numerals, unknown operators or wrong argument counts."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lambdacalc errors. Also serves as
    the trace channel for reduction steps when verbose.
    """
    ERROR = "red"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, term):
        """Prints a single reduction step if verbose."""
        if self.verbose:
            print(colored(f"{kind}  ", ErrorHandler.STEP, attrs=["bold"]) + str(term))

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.colored_msg()
        print(error_msg, file=sys.stderr)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=sys.stderr)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("normal form might exist, but maximum recursion depth exceeded"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
