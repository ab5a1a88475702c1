"""Session control for lambdacalc. Runs the interpreter over the lines of a file (one λ-term per line) or over lines
typed in command-line mode.
"""

from lambdacalc.interpreter import evaluate
from lambdacalc.lang.error import GenericException


class Session:
    """Governs a lambdacalc session: the λ-terms waiting to be reduced and the results of those already reduced."""
    SH_FILE = "<in>"  # command-line interpreter filename
    BLANK = " \t\r"

    def __init__(self, error_handler, path, cmd_line=False, limit=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.limit = limit        # reduction step budget (None for the default)

        self.to_exec = []  # list of (expr, line num) to reduce, in file order
        self.results = []  # rendered normal forms, in the same order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for line_num, line in enumerate(source.split("\n")):
                self.add(line, line_num + 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def is_blank(line):
        """Whether or not line only contains spaces, tabs, and carriage returns."""
        return all(char in Session.BLANK for char in line)

    def add(self, expr, line_num):
        """Queues expr for reduction. Blank lines are skipped. Reduction is lazy and is delayed until run is called."""
        if not Session.is_blank(expr):
            self.to_exec.append((expr, line_num))

    def run(self):
        """Reduces every queued λ-term in order and appends its normal form to self.results. Errors propagate to the
        caller with the offending line registered in the error handler's traceback.
        """
        while self.to_exec:
            expr, line_num = self.to_exec.pop(0)
            expr = expr.strip()
            self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

            self.results.append(evaluate(expr, self.limit, self.error_handler))

            self.error_handler.remove_line(self.path)  # error was not raised

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
