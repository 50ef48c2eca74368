# issuefilter/__init__.py
"""issuefilter - A filter language for issues and pull requests."""

from issuefilter.model import InMemoryModel, Model
from issuefilter.models import Issue, Label, Milestone, User
from issuefilter.query import (
    EMPTY,
    ApplyRejected,
    Conjunction,
    DateRange,
    Disjunction,
    FilterExpression,
    MetaQualifierInfo,
    Negation,
    NumberRange,
    ParseError,
    Qualifier,
    apply_to,
    filter_issues,
    parse,
    process,
    process_meta_qualifier_effects,
    serialize,
)

__all__ = [
    # Filter expressions
    "FilterExpression",
    "Qualifier",
    "Conjunction",
    "Disjunction",
    "Negation",
    "EMPTY",
    "NumberRange",
    "DateRange",
    "MetaQualifierInfo",
    "parse",
    "serialize",
    # Evaluation and application
    "process",
    "filter_issues",
    "process_meta_qualifier_effects",
    "apply_to",
    # Errors
    "ParseError",
    "ApplyRejected",
    # Models
    "Issue",
    "Label",
    "Milestone",
    "User",
    "Model",
    "InMemoryModel",
]
