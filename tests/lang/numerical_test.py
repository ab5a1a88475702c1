import unittest

from lambdacalc.grammar.pure import generate_tree
from lambdacalc.interpreter import calculate
from lambdacalc.lang.error import InvalidArgumentError
from lambdacalc.lang.numerical import ADD, MULTIPLY, PREDECESSOR, SUBTRACT, arithmetic, cnumber, number
from lambdacalc.pure.lexical import Application, reduce


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, -1, 0.3, 4.0, 14.2, "abc", "", None, True]
        for case in should_fail:
            self.assertRaises(InvalidArgumentError, cnumber, case)
            self.assertRaises(ValueError, cnumber, case)

        should_pass = {
            0: r"(\f (\x x))",
            1: r"(\f (\x (f x)))",
            3: r"(\f (\x (f (f (f x)))))",
            "2": r"(\f (\x (f (f x))))",
        }
        for case, result in should_pass.items():
            self.assertEqual(result, cnumber(case).expr, case)

    def test_negative_message(self):
        with self.assertRaises(InvalidArgumentError) as context:
            cnumber(-3)
        self.assertIn("negative", context.exception.msg)

    def test_number(self):
        should_fail = [r"\f \x f f", r"\f \x x f", r"\f \f f", r"\f f", "x", r"\f \x f (g x)", r"\f \x y"]
        for case in should_fail:
            self.assertIsNone(number(generate_tree(case)), case)

        should_pass = {3: r"\f \x f (f (f x))", 0: r"\f \x x", 2: r"\s \z s (s z)"}
        for result, case in should_pass.items():
            self.assertEqual(result, number(generate_tree(case)), case)

        for num in range(6):
            self.assertEqual(num, number(cnumber(num)))

    def test_combinators_closed(self):
        for combinator in [ADD, MULTIPLY, PREDECESSOR, SUBTRACT]:
            self.assertEqual(frozenset(), combinator.free_vars(), combinator)

    def test_combinators(self):
        cases = {
            ADD: r"(\m (\n (\f (\x ((m f) ((n f) x))))))",
            MULTIPLY: r"(\m (\n (\f (m (n f)))))",
            PREDECESSOR: r"(\n (\f (\x (((n (\g (\h (h (g f))))) (\u x)) (\u u)))))",
        }
        for combinator, expected in cases.items():
            self.assertEqual(expected, combinator.expr)
        self.assertEqual(Application(Application(generate_tree("n"), PREDECESSOR), generate_tree("m")),
                         SUBTRACT.body.body)

    def test_arithmetic(self):
        term = arithmetic(2, "+", 3)
        self.assertEqual(Application(Application(ADD, cnumber(2)), cnumber(3)), term)

        should_fail = [(2, "/", 3), (2, "plus", 3), (2, "", 3), (-1, "+", 3), (2, "+", "x")]
        for case in should_fail:
            self.assertRaises(InvalidArgumentError, arithmetic, *case)

    def test_unknown_operator_message(self):
        with self.assertRaises(InvalidArgumentError) as context:
            arithmetic(2, "/", 3)
        self.assertEqual("Unknown operator: / (supported: +, *, -)", context.exception.msg)

    def test_calculate(self):
        cases = {
            (2, "+", 3): 5,
            (0, "+", 0): 0,
            (3, "*", 4): 12,
            (0, "*", 5): 0,
            (5, "-", 2): 3,
            (2, "-", 5): 0,
            (4, "-", 4): 0,
            ("1", "+", "1"): 2,
        }
        for (left, operator, right), expected in cases.items():
            result = calculate(left, operator, right)
            self.assertEqual(cnumber(expected), result, (left, operator, right))
            self.assertEqual(cnumber(expected).expr, result.expr, (left, operator, right))
            self.assertEqual(expected, number(result), (left, operator, right))

    def test_predecessor(self):
        cases = {0: 0, 1: 0, 4: 3}
        for case, expected in cases.items():
            self.assertEqual(cnumber(expected), reduce(Application(PREDECESSOR, cnumber(case))), case)


if __name__ == '__main__':
    unittest.main()
