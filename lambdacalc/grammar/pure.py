"""Pure lambda calculus token generator and recursive-descent parser.

Formally, the accepted (ASCII) lambda calculus grammar can be defined as

```
<expression>  ::= <abstraction> | <application>
<abstraction> ::= "\\" <identifier> <expression>    ; body is greedy: \\x y z = \\x.(y z) != (\\x.y) z
<application> ::= <atom>+                           ; associating by left: a b c d = (((a b) c) d)
<atom>        ::= <identifier> | "(" <expression> ")" | <abstraction>
<identifier>  ::= <letter> (<letter> | <digit>)*
```

Precedence is atom > application > abstraction. The parser is LL(1): the kind of the next token is always enough to
pick a rule, so there is no backtracking. Whitespace only separates tokens.

Source: https://opendsa-server.cs.vt.edu/ODSA/Books/PL/html/Syntax.html
"""

import string

from lambdacalc.lang.error import LambdaSyntaxError, LexicalError
from lambdacalc.pure.lexical import Abstraction, Application, Variable


class Token:
    """Single token produced by tokenize. value is only set for identifiers; pos is the column of the token."""
    LAMBDA = "<lambda>"
    LPAREN = "<open_paren>"
    RPAREN = "<close_paren>"
    IDENTIFIER = "<identifier>"
    EOF = "<eof>"

    CHARS = {
        "\\": LAMBDA,
        "(": LPAREN,
        ")": RPAREN,
    }
    WHITESPACE = " \t\r\n"
    LETTERS = string.ascii_letters
    ALPHANUMERIC = string.ascii_letters + string.digits

    # tokens that can start an <atom>
    STARTS_ATOM = (IDENTIFIER, LPAREN, LAMBDA)

    def __init__(self, kind, value=None, pos=0):
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self):
        if self.kind == Token.IDENTIFIER:
            return f"Token({self.kind}, '{self.value}')"
        return f"Token({self.kind})"

    def __eq__(self, other):
        """Position is not part of a token's identity."""
        return isinstance(other, Token) and (self.kind, self.value) == (other.kind, other.value)

    def __hash__(self):
        return hash((self.kind, self.value))


def tokenize(text):
    """Converts text to a list of Tokens terminated by exactly one EOF token. Raises LexicalError on the first
    character that cannot start a token; no partial token list is returned.
    """
    tokens = []
    idx = 0

    while idx < len(text):
        char = text[idx]

        if char in Token.WHITESPACE:
            idx += 1

        elif char in Token.CHARS:
            tokens.append(Token(Token.CHARS[char], pos=idx))
            idx += 1

        elif char in Token.LETTERS:
            stop = idx + 1
            while stop < len(text) and text[stop] in Token.ALPHANUMERIC:
                stop += 1
            tokens.append(Token(Token.IDENTIFIER, text[idx:stop], pos=idx))
            idx = stop

        else:
            raise LexicalError(char, text, idx)

    tokens.append(Token(Token.EOF, pos=len(text)))
    return tokens


class Parser:
    """Recursive-descent parser over a token list. Each rule consumes tokens starting at self.pos and returns the
    LambdaTerm it recognized.
    """
    MISSING_VARIABLE = "Missing variable after lambda"
    MISSING_BODY = "Missing expression after lambda abstraction"
    MISSING_CLOSE_PAREN = "Missing closing parenthesis"
    EMPTY_GROUP = "Missing expression after opening parenthesis"
    UNEXPECTED_EOF = "Unexpected end of input"
    NOT_FULLY_PARSED = "Input string not fully parsed"

    def __init__(self, tokens, text=""):
        """text is the source the tokens came from and is only used for error messages."""
        self.tokens = list(tokens)
        self.text = text
        self.pos = 0

        if not self.tokens or self.tokens[-1].kind != Token.EOF:
            self.tokens.append(Token(Token.EOF, pos=len(text)))

    @property
    def current(self):
        return self.tokens[self.pos]

    def advance(self):
        """Consumes and returns the current token. EOF is never consumed past."""
        token = self.current
        if token.kind != Token.EOF:
            self.pos += 1
        return token

    def error(self, msg):
        return LambdaSyntaxError(msg, self.text, self.current.pos)

    def parse(self):
        """Parses the whole token list, including the trailing EOF."""
        term = self.expression()
        if self.current.kind != Token.EOF:
            raise self.error(Parser.NOT_FULLY_PARSED)
        return term

    def expression(self):
        if self.current.kind == Token.LAMBDA:
            return self.abstraction()
        return self.application()

    def abstraction(self):
        self.advance()  # "\"

        if self.current.kind != Token.IDENTIFIER:
            raise self.error(Parser.MISSING_VARIABLE)
        arg = self.advance().value

        if self.current.kind == Token.EOF:
            raise self.error(Parser.MISSING_BODY)

        return Abstraction(arg, self.expression())

    def application(self):
        term = self.atom()
        while self.current.kind in Token.STARTS_ATOM:
            term = Application(term, self.atom())
        return term

    def atom(self):
        kind = self.current.kind

        if kind == Token.IDENTIFIER:
            return Variable(self.advance().value)

        elif kind == Token.LPAREN:
            self.advance()
            term = self.expression()
            if self.current.kind != Token.RPAREN:
                raise self.error(Parser.MISSING_CLOSE_PAREN)
            self.advance()
            return term

        elif kind == Token.LAMBDA:
            return self.abstraction()

        elif kind == Token.RPAREN:
            raise self.error(Parser.EMPTY_GROUP)

        raise self.error(Parser.UNEXPECTED_EOF)


def parse(tokens, text=""):
    """Parses tokens (as produced by tokenize) into a LambdaTerm."""
    return Parser(tokens, text).parse()


def generate_tree(text):
    """Tokenizes and parses text in one go."""
    return parse(tokenize(text), text)
