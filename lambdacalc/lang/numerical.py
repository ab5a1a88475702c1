"""Natural numbers encoded as Church numerals, plus the arithmetic combinators that operate on them. Combinators are
written in lambdacalc syntax and parsed, thus keeping everything as pure as possible: arithmetic is done entirely by
the normal-order reducer.

```
n           = λf.λx.f (f (... (f x)))                 ; f applied n times
ADD         = λm.λn.λf.λx.(m f) (n f x)
MULTIPLY    = λm.λn.λf.m (n f)
PREDECESSOR = λn.λf.λx.n (λg.λh.h (g f)) (λu.x) (λu.u)
SUBTRACT    = λm.λn.(n PREDECESSOR) m                 ; monus: m - n, floored at 0
```

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdacalc.grammar.pure import generate_tree
from lambdacalc.lang.error import InvalidArgumentError
from lambdacalc.pure.lexical import Abstraction, Application, Variable


ADD = generate_tree(r"\m \n \f \x (m f) (n f x)")
MULTIPLY = generate_tree(r"\m \n \f m (n f)")
PREDECESSOR = generate_tree(r"\n \f \x n (\g \h h (g f)) (\u x) (\u u)")
SUBTRACT = Abstraction("m", Abstraction("n", Application(Application(Variable("n"), PREDECESSOR), Variable("m"))))

OPERATORS = {
    "+": ADD,
    "*": MULTIPLY,
    "-": SUBTRACT,
}


def cnumber(num):
    """Returns Church numeral of num as a LambdaTerm (cnum = Church numeral). num may be an int or a string of digits.
    """
    try:
        assert not isinstance(num, (bool, float))
        num = int(num)
    except (AssertionError, TypeError, ValueError):
        raise InvalidArgumentError("expected natural number, got '{}'", str(num))

    if num < 0:
        raise InvalidArgumentError("Cannot encode negative number as Church numeral: '{}'", str(num))

    f = Variable("f")
    body = Variable("x")
    for _ in range(num):
        body = Application(f, body)

    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns int given LambdaTerm cnum in normal form. If cnum isn't a Church numeral, returns None. Bound variable
    names don't matter: λs.λz.s z is 1.
    """
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    func, arg = cnum.arg, cnum.body.arg
    if func == arg:
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        if nth_body.func != Variable(func):
            return None
        nth_body = nth_body.arg
        num += 1

    return num if nth_body == Variable(arg) else None


def arithmetic(left, operator, right):
    """Builds ((OPERATOR left) right) from two naturals and an operator symbol, ready to be reduced."""
    try:
        combinator = OPERATORS[operator]
    except KeyError:
        raise InvalidArgumentError("Unknown operator: {} (supported: +, *, -)", operator)

    return Application(Application(combinator, cnumber(left)), cnumber(right))
