# issuefilter/query/parser.py
"""Parser for filter strings.

Grammar, loosest binding first::

    expression  := conjunction (OR conjunction)*
    conjunction := unary ([AND] unary)*
    unary       := NOT unary | atom
    atom        := "(" expression ")" | "()" | name:value | word | "quoted string"

``OR`` may be written ``|``/``||``, ``AND`` as ``&``/``&&`` and ``NOT`` as a
``-``, ``!`` or ``~`` prefix. Bare words and quoted strings are keyword
qualifiers.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from issuefilter.query.combinators import (
    EMPTY,
    OPERATOR_WORDS,
    Conjunction,
    Content,
    Disjunction,
    FilterExpression,
    Negation,
    Qualifier,
)
from issuefilter.query.keywords import DATE_QUALIFIERS, NUMBER_QUALIFIERS, is_known_qualifier
from issuefilter.query.ranges import DateRange, NumberRange

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"\d+")
_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_WORD_BREAKS = '():"'
_NOT_PREFIXES = "-!~"
_ATOM_STARTS = frozenset({"LPAREN", "NOT", "QUALIFIER", "WORD", "STRING"})

# Parentheses and NOT prefixes that may enclose one another
MAX_NESTING = 100


class ParseError(ValueError):
    """Raised when a filter string is malformed.

    ``start`` and ``end`` delimit the offending span of ``query``.
    """

    def __init__(self, message: str, query: str, start: int, end: int | None = None) -> None:
        super().__init__(f"{message} (at position {start})")
        self.message = message
        self.query = query
        self.start = start
        self.end = end if end is not None else start + 1

    def highlight(self) -> str:
        """The query with the offending span underlined by carets."""
        width = max(1, self.end - self.start)
        return f"{self.query}\n{' ' * self.start}{'^' * width}"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int
    end: int
    name: str = ""
    value: str = ""
    value_start: int = 0


def _read_quoted(query: str, i: int) -> tuple[str, int]:
    """Read the quoted string opening at ``query[i]``; returns (text, end)."""
    chars: list[str] = []
    j = i + 1
    while j < len(query):
        ch = query[j]
        if ch == "\\" and j + 1 < len(query) and query[j + 1] in '"\\':
            chars.append(query[j + 1])
            j += 2
        elif ch == '"':
            return "".join(chars), j + 1
        else:
            chars.append(ch)
            j += 1
    raise ParseError("Unterminated quoted string", query, i, len(query))


def _tokenize(query: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0
    n = len(query)

    while i < n:
        ch = query[i]
        if ch.isspace():
            i += 1
            continue

        if ch in "()":
            tokens.append(Token("LPAREN" if ch == "(" else "RPAREN", ch, i, i + 1))
            i += 1
            continue

        if ch in "&|":
            width = 2 if query.startswith(ch * 2, i) else 1
            kind = "AND" if ch == "&" else "OR"
            tokens.append(Token(kind, query[i : i + width], i, i + width))
            i += width
            continue

        if ch in _NOT_PREFIXES:
            tokens.append(Token("NOT", ch, i, i + 1))
            i += 1
            continue

        if ch == '"':
            text, end = _read_quoted(query, i)
            tokens.append(Token("STRING", query[i:end], i, end, value=text))
            i = end
            continue

        start = i
        while i < n and not query[i].isspace() and query[i] not in _WORD_BREAKS:
            i += 1
        word = query[start:i]

        if i < n and query[i] == ":":
            if not word:
                raise ParseError("Missing qualifier name before ':'", query, i)
            i += 1
            value_start = i
            if i < n and query[i] == '"':
                value, i = _read_quoted(query, i)
            else:
                while i < n and not query[i].isspace() and query[i] not in '()"':
                    i += 1
                value = query[value_start:i]
                if not value:
                    raise ParseError(f"Missing value for qualifier '{word}'", query, start, i)
            tokens.append(
                Token("QUALIFIER", query[start:i], start, i, word, value, value_start)
            )
        elif word in OPERATOR_WORDS:
            tokens.append(Token(word, word, start, i))
        else:
            tokens.append(Token("WORD", word, start, i, value=word))

    tokens.append(Token("EOF", "", n, n))
    return tokens


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"Not a number: {text!r}")
    return int(text)


def _parse_date(text: str) -> date:
    if not _DATE.fullmatch(text):
        raise ValueError(f"Not a date: {text!r}")
    return date.fromisoformat(text)


def _parse_range[T](
    text: str,
    parse_bound: Callable[[str], T],
    range_type: Callable[..., NumberRange | DateRange],
) -> NumberRange | DateRange | None:
    """Parse ``<x``, ``<=x``, ``>x``, ``>=x``, ``a..b`` (``*`` for open ends).

    Returns None if ``text`` is not range syntax.
    """
    for op in ("<=", ">=", "<", ">"):
        if text.startswith(op):
            bound = parse_bound(text[len(op) :])
            match op:
                case "<=":
                    return range_type(end=bound)
                case "<":
                    return range_type(end=bound, end_inclusive=False)
                case ">=":
                    return range_type(start=bound)
                case ">":
                    return range_type(start=bound, start_inclusive=False)

    if ".." in text:
        low, _, high = text.partition("..")
        start = None if low == "*" else parse_bound(low)
        end = None if high == "*" else parse_bound(high)
        return range_type(start, end)

    return None


def _number_content(text: str) -> int | NumberRange:
    number_range = _parse_range(text, _parse_int, NumberRange)
    return number_range if number_range is not None else _parse_int(text)


def _date_content(text: str) -> date | DateRange:
    date_range = _parse_range(text, _parse_date, DateRange)
    return date_range if date_range is not None else _parse_date(text)


class _Parser:
    def __init__(self, query: str) -> None:
        self.query = query
        self.tokens = _tokenize(query)
        self.pos = 0
        self.depth = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "EOF":
            self.pos += 1
        return token

    def error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, self.query, token.start, token.end)

    def nest(self, token: Token) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise self.error("Filter is nested too deeply", token)

    def parse(self) -> FilterExpression:
        if self.peek().kind == "EOF":
            return EMPTY

        expr = self.disjunction()

        token = self.peek()
        if token.kind == "RPAREN":
            raise self.error("Unbalanced parenthesis", token)
        if token.kind != "EOF":
            raise self.error(f"Unexpected '{token.text}'", token)
        return expr

    def disjunction(self) -> FilterExpression:
        left = self.conjunction()
        while self.peek().kind == "OR":
            self.advance()
            left = Disjunction(left, self.conjunction())
        return left

    def conjunction(self) -> FilterExpression:
        left = self.unary()
        while True:
            kind = self.peek().kind
            if kind == "AND":
                self.advance()
            elif kind not in _ATOM_STARTS:
                return left
            left = Conjunction(left, self.unary())

    def unary(self) -> FilterExpression:
        if self.peek().kind == "NOT":
            self.nest(self.advance())
            operand = self.unary()
            self.depth -= 1
            return Negation(operand)
        return self.atom()

    def atom(self) -> FilterExpression:
        token = self.advance()
        match token.kind:
            case "LPAREN":
                if self.peek().kind == "RPAREN":
                    self.advance()
                    return EMPTY
                self.nest(token)
                expr = self.disjunction()
                closing = self.peek()
                if closing.kind != "RPAREN":
                    raise ParseError(
                        "Unbalanced parenthesis", self.query, token.start, closing.start
                    )
                self.advance()
                self.depth -= 1
                return expr
            case "QUALIFIER":
                return self.qualifier(token)
            case "WORD" | "STRING":
                return Qualifier("keyword", token.value)
            case "RPAREN":
                raise self.error("Unbalanced parenthesis", token)
            case "EOF":
                raise self.error("Unexpected end of filter", token)
            case _:
                raise self.error(f"Unexpected '{token.text}'", token)

    def qualifier(self, token: Token) -> Qualifier:
        name = token.name.lower()
        if not is_known_qualifier(name):
            logger.debug("Unknown qualifier '%s' will never match", name)

        content: Content
        try:
            if name in DATE_QUALIFIERS:
                content = _date_content(token.value)
            elif name in NUMBER_QUALIFIERS:
                content = _number_content(token.value)
            else:
                content = token.value
        except ValueError as e:
            raise ParseError(
                f"Invalid value for '{name}': {e}", self.query, token.value_start, token.end
            ) from e
        return Qualifier(name, content)


def parse(query: str) -> FilterExpression:
    """Parse a filter string into a FilterExpression.

    Raises:
        ParseError: if the string is not a valid filter.
    """
    logger.debug("Parsing filter: %s", query)
    return _Parser(query).parse()
