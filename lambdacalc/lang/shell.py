"""Handles interactive/command-line mode for the lambdacalc interpreter. Uses cmd as backend.

Shell commands start with ':' (which can never begin a λ-term), so any other line is reduced as a λ-term, even one
like `exit y` or `calc x`.
"""

import cmd

from lambdacalc.interpreter import calculate
from lambdacalc.lang.error import InvalidArgumentError
from lambdacalc.lang.numerical import number


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: Python backend\nType ':help' for more information."
    prompt = "> "
    COMMAND = ":"

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def onecmd(self, line):
        """Dispatches ':name args' to do_name, end of input to do_EOF, and everything else to default."""
        if line == "EOF":  # sent by cmd.Cmd.cmdloop at end of input
            return self.do_EOF("")
        if line.startswith(Shell.COMMAND):
            name = self.parseline(line[len(Shell.COMMAND):])[0]
            if not name or not hasattr(self, "do_" + name):
                return self.unknown(line)
            return super().onecmd(line[len(Shell.COMMAND):])
        if not line.strip():
            return self.emptyline()
        return self.default(line)

    def unknown(self, line):
        """Reports a ':' line that names no shell command."""
        with self.sess.error_handler:
            raise InvalidArgumentError("Unknown command: '{}' (type ':help' for more information)", line)

    def default(self, line):
        """Reduces arbitrary λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_calc(self, arg):
        """:calc NUM OP NUM: Church numeral arithmetic, where OP is one of +, *, -."""
        with self.sess.error_handler:
            self.line_num += 1
            self.sess.error_handler.register_line(self.sess.path, f":calc {arg}", self.line_num)

            args = arg.split()
            if len(args) != 3:
                raise InvalidArgumentError(":calc expects NUM OP NUM, got '{}'", arg)

            result = calculate(*args, limit=self.sess.limit, error_handler=self.sess.error_handler)
            print(f"{result}  ;; {number(result)}")

            self.sess.error_handler.remove_line(self.sess.path)

    def do_trace(self, arg):
        """Toggles printing of every beta reduction step."""
        self.sess.error_handler.verbose = not self.sess.error_handler.verbose
        print(f"trace {'on' if self.sess.error_handler.verbose else 'off'}")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lambdacalc interpreter!\n\n"
              "Lambda calculus is a Turing-complete language created by Alonzo Church. This \n"
              "interpreter reduces pure lambda calculus terms to their normal form, using \n"
              "normal-order (leftmost-outermost) beta reduction.\n\n"
              "Try it out by typing '(\\x x) y'. This will apply the identity function to 'y', \n"
              "giving 'y' as the result. Shell commands start with ':'. Type ':calc 2 + 3' for \n"
              "Church numeral arithmetic, ':trace' to see every reduction step, and ':exit' to quit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
