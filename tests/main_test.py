import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from lambdacalc.lang.numerical import cnumber
from lambdacalc.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, text):
        path = os.path.join(self.tmp.name, "input.lc")
        with open(path, "w") as file:
            file.write(text)
        return path

    def run_main(self, *argv):
        with redirect_stdout(self.stdout), redirect_stderr(self.stderr):
            return main(list(argv))

    def assert_fails(self, *argv, code=1):
        with self.assertRaises(SystemExit) as context:
            self.run_main(*argv)
        self.assertEqual(code, context.exception.code, argv)

    def test_file_mode(self):
        path = self.write("(\\x x)(\\y y)\nx y\n\n(\\x \\y x)(\\z y)\n(\\x y) ((\\x (x x)) (\\x (x x)))\n")
        self.assertEqual(0, self.run_main(path))
        self.assertEqual(["(\\y y)", "(x y)", "(\\y1 (\\z y))", "y"], self.stdout.getvalue().splitlines())

    def test_file_mode_errors(self):
        cases = {
            "x\n1\n": "Unexpected character: 1",
            "x\n\\\n": "Missing variable after lambda",
            "(x\n": "Missing closing parenthesis",
            "(\\x (x x)) (\\x (x x))\n": "reduction limit reached after 1000 steps",
        }
        for case, msg in cases.items():
            self.stdout = io.StringIO()
            self.stderr = io.StringIO()
            self.assert_fails(self.write(case))
            self.assertEqual("", self.stdout.getvalue(), case)
            self.assertIn(msg, self.stderr.getvalue(), case)

    def test_missing_file(self):
        self.assert_fails(os.path.join(self.tmp.name, "missing.lc"))
        self.assertIn("could not be opened", self.stderr.getvalue())

    def test_arithmetic_mode(self):
        cases = {("2", "+", "3"): 5, ("3", "*", "4"): 12, ("5", "-", "2"): 3, ("2", "-", "5"): 0, ("0", "+", "0"): 0}
        for argv, expected in cases.items():
            self.stdout = io.StringIO()
            self.assertEqual(0, self.run_main(*argv))
            self.assertEqual(f"{cnumber(expected)}\n", self.stdout.getvalue(), argv)

    def test_decimal(self):
        self.run_main("--decimal", "3", "*", "4")
        self.assertEqual([cnumber(12).expr, "12"], self.stdout.getvalue().splitlines())

    def test_arithmetic_errors(self):
        should_fail = [("2", "/", "3"), ("-1", "+", "3"), ("a", "+", "3"), ("2", "+", "1.5")]
        for argv in should_fail:
            self.assert_fails(*argv)

    def test_argument_count(self):
        for argv in [("a", "b"), ("1", "+", "2", "3")]:
            self.stderr = io.StringIO()
            self.assert_fails(*argv)
            self.assertIn("Invalid number of arguments", self.stderr.getvalue())
            self.assertIn("usage:", self.stderr.getvalue())

    def test_max_steps(self):
        path = self.write("(\\x x) ((\\y y) z)\n")
        self.assert_fails("--max-steps", "2", path)
        self.assertIn("reduction limit reached after 2 steps", self.stderr.getvalue())

        self.stdout = io.StringIO()
        self.assertEqual(0, self.run_main("--max-steps", "3", path))
        self.assertEqual("z\n", self.stdout.getvalue())

    def test_max_steps_invalid(self):
        for value in ["0", "-4", "many"]:
            self.assert_fails("--max-steps", value, "x", code=2)

    def test_trace(self):
        path = self.write("((\\x x) x)((\\x x) x)\n")
        self.run_main("--trace", path)
        lines = self.stdout.getvalue().splitlines()
        self.assertEqual(3, len(lines))
        self.assertEqual("(x x)", lines[-1])


if __name__ == '__main__':
    unittest.main()
