"""Lambda calculus interpreter.

For reference:
- "Pure lambda calculus": lambda calculus as defined by Church, see pure/lexical.py
- ASCII syntax: `\\x body` for abstractions, juxtaposition for application, parentheses for grouping

Basic program flow for a single line:
    1. Lexer: converts the line to a list of tokens (grammar/pure.py, tokenize)
    2. Parser: recursive descent over the tokens, produces a LambdaTerm tree (grammar/pure.py, Parser)
    3. Reducer: normal-order beta reduction until no redex remains or the step budget runs out
       (pure/lexical.py, reduce)
    4. Renderer: the normal form's fully parenthesized expr (pure/lexical.py, render)

Arithmetic mode skips steps 1 and 2: Church numerals and combinators are built directly (lang/numerical.py).

Each stage either returns a value or raises a GenericException subclass (lang/error.py); nothing is recovered here.
"""

from lambdacalc.grammar.pure import generate_tree
from lambdacalc.lang.numerical import arithmetic
from lambdacalc.pure.lexical import reduce, render


def evaluate(line, limit=None, error_handler=None):
    """Returns the rendered beta-normal form of the λ-term in line."""
    return render(reduce(generate_tree(line), limit, error_handler))


def calculate(left, operator, right, limit=None, error_handler=None):
    """Returns the normal form (a LambdaTerm) of Church arithmetic on two naturals. operator is one of +, *, -."""
    return reduce(arithmetic(left, operator, right), limit, error_handler)
