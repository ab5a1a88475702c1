"""Pure lambda calculus syntax tree, capture-avoiding substitution and normal-order beta reduction.

The `pure` directory contains the pure lambda calculus core: no I/O, no error presentation, no numbers.

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <variable>                 ; "variable"
                                        ; - letter followed by letters/digits, case-sensitive
           | "λ" <variable> "." <λ-term>  ; "abstraction"
                                        ; - abstraction bodies are greedy: λx.x y = λx.(x y) != (λx.x) (y)
           | <λ-term> <λ-term>          ; "application"
                                        ; - associating by left: abcd = ((((a) b) c) d)
```

The ASCII surface syntax (`\\x body`) and its parser live in grammar/pure.py. Every LambdaTerm renders itself to the
canonical, fully parenthesized form in its `expr` property:

```
Variable(x)          ->  x
Application(M, N)    ->  (M N)
Abstraction(x, M)    ->  (\\x M)
```

LambdaTerms are immutable. Substitution and reduction always build new trees, sharing unchanged subtrees.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import abstractmethod, ABC

from lambdacalc.lang.error import ReductionLimitError


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application. Subclasses are immutable; nodes is a tuple of
    children (empty for Variables).
    """
    __slots__ = ("nodes", "_expr", "_free")

    def __init__(self, nodes, expr=None):
        object.__setattr__(self, "nodes", tuple(nodes))
        object.__setattr__(self, "_expr", expr)
        object.__setattr__(self, "_free", None)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def expr(self):
        """The rendered term. Built on first use and cached on this node only, so subterms don't each keep a copy."""
        if self._expr is None:
            parts = []
            self._render(parts)
            object.__setattr__(self, "_expr", "".join(parts))
        return self._expr

    @abstractmethod
    def _render(self, parts):
        """This method should append the rendering of self to parts, reusing a cached expr where there is one."""

    def free_vars(self):
        """Set of names that occur free in self. Cached, since terms are immutable."""
        if self._free is None:
            object.__setattr__(self, "_free", frozenset(self._compute_free_vars()))
        return self._free

    @abstractmethod
    def _compute_free_vars(self):
        """This method should return the free variable names of self (uncached)."""

    @abstractmethod
    def alpha_convert(self, old, new):
        """This method should return a copy of self with every occurrence of the name old (free, bound, or as a binder)
        renamed to new. Only meant to be used on abstraction bodies during sub; see Abstraction.rename.
        """

    @abstractmethod
    def sub(self, var, new_term):
        """Given a redex (λvar.M)new_term, M.sub(var, new_term) returns M with every free occurrence of var replaced by
        new_term. Binders that would capture a free variable of new_term are renamed first.
        """

    @abstractmethod
    def step(self):
        """Performs a single normal-order beta reduction step. Returns the reduced term, or None if self is already in
        beta-normal form.
        """

    @abstractmethod
    def alpha_equals(self, other, mapping=None, other_mapping=None):
        """Whether or not two LambdaTerms are alpha-equivalent. mapping represents map between self vars and other vars
        that are alpha-equivalent to their corresponding key entry. other_mapping is similar to mapping but from
        perspective of other.
        """

    @property
    def is_leftmost(self):
        """Whether or not this node is a redex, ie an Application whose left child is an Abstraction."""
        return False

    def __repr__(self):
        return f"{type(self).__name__}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, LambdaTerm) and self.expr == other.expr

    def __hash__(self):
        return hash(self.expr)


class Variable(LambdaTerm):
    """Variable in lambda calculus: a name that is either free or bound by an enclosing Abstraction."""
    __slots__ = ()

    def __init__(self, name):
        super().__init__((), name)

    @property
    def name(self):
        return self._expr

    def _render(self, parts):
        parts.append(self._expr)

    def _compute_free_vars(self):
        return {self.name}

    def alpha_convert(self, old, new):
        if self.name == old:
            return Variable(new)
        return self

    def sub(self, var, new_term):
        if self.name == var:
            return new_term
        return self

    def step(self):
        return None

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Variable):
            return False

        bound = mapping.get(self.name)
        other_bound = other_mapping.get(other.name)
        if bound or other_bound:
            # bound variables must refer to binders at the same place in both terms
            return bool(bound) and bool(other_bound) and bound[-1] == other.name and other_bound[-1] == self.name

        return self.name == other.name


class Abstraction(LambdaTerm):
    """Abstraction: the basic datatype in lambda calculus. Binds arg within body."""
    __slots__ = ()

    def __init__(self, arg, body):
        super().__init__((Variable(arg), body))

    @property
    def arg(self):
        return self.nodes[0].name

    @property
    def body(self):
        return self.nodes[1]

    def _render(self, parts):
        if self._expr is not None:
            parts.append(self._expr)
        else:
            parts.append(f"(\\{self.arg} ")
            self.body._render(parts)
            parts.append(")")

    def _compute_free_vars(self):
        return self.body.free_vars() - {self.arg}

    def alpha_convert(self, old, new):
        arg = new if self.arg == old else self.arg
        return Abstraction(arg, self.body.alpha_convert(old, new))

    def rename(self, used):
        """Returns a copy of self whose binder is the first of arg, arg1, arg2, ... that is not in used. A candidate
        is also skipped if renaming to it is not an alpha-conversion, ie an inner binder of the same name would capture
        a renamed occurrence (or be captured by the new binder).
        """
        taken = set(used)
        while True:
            arg = fresh_var(self.arg, taken)
            renamed = Abstraction(arg, self.body.alpha_convert(self.arg, arg))
            if renamed.alpha_equals(self):
                return renamed
            taken.add(arg)

    def sub(self, var, new_term):
        if self.arg == var:
            return self  # var is re-bound here, so there are no free occurrences to replace

        if self.arg in new_term.free_vars():
            renamed = self.rename(self.free_vars() | new_term.free_vars())
            if var not in self.free_vars():
                return renamed  # the renamed binder may be var itself, which must not be substituted
            return Abstraction(renamed.arg, renamed.body.sub(var, new_term))

        body = self.body.sub(var, new_term)
        return self if body is self.body else Abstraction(self.arg, body)

    def step(self):
        body = self.body.step()
        if body is None:
            return None
        return Abstraction(self.arg, body)

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Abstraction):
            return False

        mapping.setdefault(self.arg, []).append(other.arg)
        other_mapping.setdefault(other.arg, []).append(self.arg)
        try:
            return self.body.alpha_equals(other.body, mapping, other_mapping)
        finally:
            mapping[self.arg].pop()
            other_mapping[other.arg].pop()


class Application(LambdaTerm):
    """Application of a function term to an argument term."""
    __slots__ = ()

    def __init__(self, func, arg):
        super().__init__((func, arg))

    @property
    def func(self):
        return self.nodes[0]

    @property
    def arg(self):
        return self.nodes[1]

    def _render(self, parts):
        if self._expr is not None:
            parts.append(self._expr)
        else:
            parts.append("(")
            self.func._render(parts)
            parts.append(" ")
            self.arg._render(parts)
            parts.append(")")

    def _compute_free_vars(self):
        return self.func.free_vars() | self.arg.free_vars()

    def alpha_convert(self, old, new):
        return Application(self.func.alpha_convert(old, new), self.arg.alpha_convert(old, new))

    def sub(self, var, new_term):
        func = self.func.sub(var, new_term)
        arg = self.arg.sub(var, new_term)
        if func is self.func and arg is self.arg:
            return self
        return Application(func, arg)

    def step(self):
        if self.is_leftmost:
            return self.func.body.sub(self.func.arg, self.arg)

        func = self.func.step()
        if func is not None:
            return Application(func, self.arg)

        arg = self.arg.step()
        if arg is not None:
            return Application(self.func, arg)

        return None

    def alpha_equals(self, other, mapping=None, other_mapping=None):
        if mapping is None:
            mapping = {}
        if other_mapping is None:
            other_mapping = {}

        if not isinstance(other, Application):
            return False

        for node, other_node in zip(self.nodes, other.nodes):
            if not node.alpha_equals(other_node, mapping, other_mapping):
                return False
        return True

    @property
    def is_leftmost(self):
        """Applications are the only LambdaTerm that can be a redex: their left child is an Abstraction."""
        return isinstance(self.func, Abstraction)


def fresh_var(base, used):
    """Returns the first of base, base1, base2, ... that is not in used."""
    candidate = base
    subscript = 0
    while candidate in used:
        subscript += 1
        candidate = f"{base}{subscript}"
    return candidate


def free_vars(term):
    return set(term.free_vars())


def substitute(term, var, new_term):
    """Replaces every free occurrence of var in term with new_term, avoiding capture."""
    return term.sub(var, new_term)


def render(term):
    return term.expr


class NormalOrderReducer:
    """Implements normal-order (leftmost-outermost) beta reduction of a syntax tree. Only completed beta reductions
    count against the step budget.
    """
    STEP_LIMIT = 1000

    def __init__(self, tree, limit=None):
        self.tree = tree
        self.limit = NormalOrderReducer.STEP_LIMIT if limit is None else limit
        self.steps = 0

    def beta_reduce(self, error_handler=None):
        """Reduces self.tree to beta-normal form and returns it. Raises ReductionLimitError once self.limit steps have
        been taken without reaching a normal form. error_handler (if given) is notified of every step.
        """
        original_expr = self.tree.expr

        while True:
            if self.steps >= self.limit:
                raise ReductionLimitError(self.steps, original_expr)

            reduced = self.tree.step()
            if reduced is None:
                return self.tree

            self.tree = reduced
            self.steps += 1
            if error_handler is not None:
                error_handler.register_step("β", self.tree)


def reduce(term, limit=None, error_handler=None):
    """Returns the beta-normal form of term. See NormalOrderReducer.beta_reduce."""
    return NormalOrderReducer(term, limit).beta_reduce(error_handler)
