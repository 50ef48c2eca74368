# issuefilter/query/combinators.py
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from types import UnionType

from issuefilter.query.ranges import DateRange, NumberRange

type Content = str | int | date | NumberRange | DateRange

OPERATOR_WORDS = frozenset({"AND", "OR", "NOT"})
OPERATOR_PREFIXES = ("-", "!", "~", "&", "|")
_SPECIAL_CHARS = frozenset('()":\\')


@dataclass(frozen=True)
class FilterExpression:
    """Base AST node for filter expressions."""

    def __and__(self, other: "FilterExpression") -> "Conjunction":
        return Conjunction(self, other)

    def __or__(self, other: "FilterExpression") -> "Disjunction":
        return Disjunction(self, other)

    def __invert__(self) -> "Negation":
        return Negation(self)

    def __str__(self) -> str:
        return serialize(self)


@dataclass(frozen=True)
class Qualifier(FilterExpression):
    """Leaf condition: name:content."""

    name: str
    content: Content

    @property
    def is_empty(self) -> bool:
        return self.name == "" and self.content == ""


@dataclass(frozen=True)
class Conjunction(FilterExpression):
    """Logical AND of two expressions."""

    left: FilterExpression
    right: FilterExpression


@dataclass(frozen=True)
class Disjunction(FilterExpression):
    """Logical OR of two expressions."""

    left: FilterExpression
    right: FilterExpression


@dataclass(frozen=True)
class Negation(FilterExpression):
    """Logical NOT of an expression."""

    operand: FilterExpression


EMPTY = Qualifier("", "")

type Predicate = Callable[[Qualifier], bool]


def filter_qualifiers(expr: FilterExpression, pred: Predicate) -> FilterExpression:
    """Copy ``expr``, replacing every qualifier failing ``pred`` with EMPTY.

    The tree shape is kept: a stripped leaf under a Negation becomes NOT(EMPTY),
    which is never satisfied.
    """
    # Post-order walk with an explicit stack; long AND/OR chains are deep
    stack: list[tuple[FilterExpression, bool]] = [(expr, False)]
    built: list[FilterExpression] = []
    while stack:
        node, children_built = stack.pop()
        match node:
            case Qualifier():
                built.append(node if pred(node) else EMPTY)
            case Conjunction(left=l, right=r) | Disjunction(left=l, right=r):
                if children_built:
                    right = built.pop()
                    built.append(type(node)(built.pop(), right))
                else:
                    stack.extend([(node, True), (r, False), (l, False)])
            case Negation(operand=o):
                if children_built:
                    built.append(Negation(built.pop()))
                else:
                    stack.extend([(node, True), (o, False)])
            case _:
                raise ValueError(f"Unsupported filter node: {node!r}")
    return built[0]


def find_qualifiers(expr: FilterExpression, pred: Predicate) -> list[Qualifier]:
    """All qualifiers in ``expr`` matching ``pred``, in pre-order."""
    found: list[Qualifier] = []
    stack = [expr]
    while stack:
        node = stack.pop()
        match node:
            case Qualifier():
                if pred(node):
                    found.append(node)
            case Conjunction(left=l, right=r) | Disjunction(left=l, right=r):
                stack.extend((r, l))
            case Negation(operand=o):
                stack.append(o)
            case _:
                raise ValueError(f"Unsupported filter node: {node!r}")
    return found


def operands(expr: FilterExpression, kind: type) -> list[FilterExpression]:
    """Operands of the chain of ``kind`` nodes rooted at ``expr``, left to right.

    ``a AND (b AND c)`` and ``(a AND b) AND c`` both give ``[a, b, c]``.
    """
    result: list[FilterExpression] = []
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, kind):
            stack.extend((node.right, node.left))
        else:
            result.append(node)
    return result


def qualifier_names(expr: FilterExpression) -> list[str]:
    return [q.name for q in find_qualifiers(expr, lambda q: not q.is_empty)]


def quote(text: str) -> str:
    """Quote ``text`` if it would not survive re-parsing as a bare word."""
    needs_quotes = (
        not text
        or any(ch.isspace() or ch in _SPECIAL_CHARS for ch in text)
        or text.startswith(OPERATOR_PREFIXES)
        or text in OPERATOR_WORDS
    )
    if not needs_quotes:
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_content(content: Content) -> str:
    match content:
        case str():
            return quote(content)
        case date():
            return content.isoformat()
        case _:
            return str(content)


def serialize(expr: FilterExpression) -> str:
    """Render ``expr`` in filter syntax; the result parses back to ``expr``."""
    match expr:
        case Qualifier() if expr.is_empty:
            return ""
        case Qualifier(name="keyword", content=str() as c):
            return quote(c)
        case Qualifier(name=n, content=c):
            return f"{n}:{_format_content(c)}"
        case Conjunction():
            if _effective(expr) is not expr:
                return serialize(_effective(expr))
            # Walk the left spine iteratively; parsed chains nest to the left
            parts = []
            while isinstance(expr, Conjunction):
                if not _is_empty(expr.right):
                    parts.append(_wrap(expr.right, Disjunction | Conjunction))
                expr = expr.left
            if not _is_empty(expr):
                parts.append(_wrap(expr, Disjunction))
            return " ".join(reversed(parts))
        case Disjunction():
            parts = []
            while isinstance(expr, Disjunction):
                parts.append(_wrap(expr.right, Disjunction))
                expr = expr.left
            parts.append(_operand(expr))
            return " OR ".join(reversed(parts))
        case Negation(operand=o):
            return f"NOT {_wrap(o, Conjunction | Disjunction)}"
        case _:
            raise ValueError(f"Unsupported filter node: {expr!r}")


def _is_empty(expr: FilterExpression) -> bool:
    return isinstance(expr, Qualifier) and expr.is_empty


def _effective(expr: FilterExpression) -> FilterExpression:
    """The node ``expr`` serialises as once EMPTY conjuncts are dropped."""
    while isinstance(expr, Conjunction) and (_is_empty(expr.left) or _is_empty(expr.right)):
        expr = expr.right if _is_empty(expr.left) else expr.left
    return expr


def _operand(expr: FilterExpression) -> str:
    expr = _effective(expr)
    return "()" if _is_empty(expr) else serialize(expr)


def _wrap(expr: FilterExpression, kinds: type | UnionType) -> str:
    if isinstance(_effective(expr), kinds):
        return f"({serialize(expr)})"
    return _operand(expr)
