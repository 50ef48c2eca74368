# issuefilter/query/__init__.py
from datetime import date

from issuefilter.query.apply import ApplyRejected, apply_to, can_be_applied
from issuefilter.query.combinators import (
    EMPTY,
    Conjunction,
    Disjunction,
    FilterExpression,
    Negation,
    Qualifier,
    filter_qualifiers,
    find_qualifiers,
    qualifier_names,
    serialize,
)
from issuefilter.query.evaluate import is_satisfied_by
from issuefilter.query.meta import (
    MetaQualifierInfo,
    filter_issues,
    process,
    process_meta_qualifier_effects,
)
from issuefilter.query.parser import ParseError, parse
from issuefilter.query.ranges import DateRange, NumberRange

__all__ = [
    "FilterExpression",
    "Qualifier",
    "Conjunction",
    "Disjunction",
    "Negation",
    "EMPTY",
    "NumberRange",
    "DateRange",
    "MetaQualifierInfo",
    "ParseError",
    "ApplyRejected",
    "parse",
    "serialize",
    "filter_qualifiers",
    "find_qualifiers",
    "qualifier_names",
    "is_satisfied_by",
    "process",
    "filter_issues",
    "process_meta_qualifier_effects",
    "apply_to",
    "can_be_applied",
    "keyword",
    "title",
    "body",
    "label",
    "milestone",
    "author",
    "assignee",
    "state",
    "repo",
    "has",
    "no",
    "is_",
    "id_",
    "created",
    "updated",
]


# Factory functions (public API)
def keyword(value: str) -> Qualifier:
    return Qualifier("keyword", value)


def title(value: str) -> Qualifier:
    return Qualifier("title", value)


def body(value: str) -> Qualifier:
    return Qualifier("body", value)


def label(value: str) -> Qualifier:
    return Qualifier("label", value)


def milestone(value: str) -> Qualifier:
    return Qualifier("milestone", value)


def author(value: str) -> Qualifier:
    return Qualifier("author", value)


def assignee(value: str) -> Qualifier:
    return Qualifier("assignee", value)


def state(value: str) -> Qualifier:
    return Qualifier("state", value)


def repo(value: str) -> Qualifier:
    return Qualifier("repo", value)


def has(value: str) -> Qualifier:
    return Qualifier("has", value)


def no(value: str) -> Qualifier:
    return Qualifier("no", value)


def is_(value: str) -> Qualifier:
    return Qualifier("is", value)


def id_(value: int | NumberRange) -> Qualifier:
    return Qualifier("id", value)


def created(value: date | DateRange) -> Qualifier:
    return Qualifier("created", value)


def updated(value: int | NumberRange) -> Qualifier:
    return Qualifier("updated", value)
