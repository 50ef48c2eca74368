# issuefilter/query/evaluate.py
"""Evaluation of filter expressions against issues.

Evaluation never raises: a qualifier with an unknown name, content of the
wrong type or a reference the model cannot resolve simply does not match.
Use :func:`issuefilter.query.meta.process` rather than calling
:func:`is_satisfied_by` directly, so meta-qualifiers are handled.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from issuefilter.clock import current_time, hours_between
from issuefilter.models import Issue, split_label
from issuefilter.query.combinators import (
    Conjunction,
    Disjunction,
    FilterExpression,
    Negation,
    Qualifier,
    operands,
)
from issuefilter.query.ranges import DateRange, NumberRange
from issuefilter.text import contains_ignore_case, normalize

if TYPE_CHECKING:
    from issuefilter.model import Model
    from issuefilter.query.meta import MetaQualifierInfo


def is_satisfied_by(
    expr: FilterExpression,
    model: Model,
    issue: Issue,
    info: MetaQualifierInfo | None = None,
    now: datetime | None = None,
) -> bool:
    match expr:
        case Qualifier():
            return qualifier_satisfied_by(expr, model, issue, info, now)
        case Conjunction():
            return all(
                is_satisfied_by(o, model, issue, info, now) for o in operands(expr, Conjunction)
            )
        case Disjunction():
            return any(
                is_satisfied_by(o, model, issue, info, now) for o in operands(expr, Disjunction)
            )
        case Negation(operand=o):
            return not is_satisfied_by(o, model, issue, info, now)
        case _:
            return False


def qualifier_satisfied_by(
    q: Qualifier,
    model: Model,
    issue: Issue,
    info: MetaQualifierInfo | None = None,
    now: datetime | None = None,
) -> bool:
    if q.is_empty:
        return True

    match q.name:
        case "id":
            return _id_satisfies(q, issue)
        case "keyword":
            return _keyword_satisfies(q, issue, info)
        case "title":
            return _title_satisfies(q, issue)
        case "body" | "desc":
            return _body_satisfies(q, issue)
        case "milestone":
            return _milestone_satisfies(q, model, issue)
        case "label":
            return _labels_satisfy(q, model, issue)
        case "author":
            return _author_satisfies(q, issue)
        case "assignee":
            return _assignee_satisfies(q, model, issue)
        case "involves" | "user":
            return _author_satisfies(q, issue) or _assignee_satisfies(q, model, issue)
        case "type":
            return _type_satisfies(q, issue)
        case "state" | "status":
            return _state_satisfies(q, issue)
        case "has":
            return _has_satisfies(q, issue)
        case "no":
            return isinstance(q.content, str) and not _has_satisfies(q, issue)
        case "is":
            return _is_satisfies(q, issue)
        case "created":
            return _created_satisfies(q, issue)
        case "updated":
            return _updated_satisfies(q, issue, now)
        case "repo":
            return isinstance(q.content, str) and issue.repo_id == q.content
        case _:
            return False


def _text(q: Qualifier) -> str | None:
    return q.content if isinstance(q.content, str) else None


def _id_satisfies(q: Qualifier, issue: Issue) -> bool:
    match q.content:
        case NumberRange():
            return q.content.encloses(issue.id)
        case int():
            return issue.id == q.content
        case _:
            return False


def _keyword_satisfies(q: Qualifier, issue: Issue, info: MetaQualifierInfo | None) -> bool:
    scope = info.in_scope if info is not None else None
    if scope is None:
        return _title_satisfies(q, issue) or _body_satisfies(q, issue)

    match scope:
        case "title":
            return _title_satisfies(q, issue)
        case "body" | "desc":
            return _body_satisfies(q, issue)
        case _:
            return False


def _title_satisfies(q: Qualifier, issue: Issue) -> bool:
    text = _text(q)
    return text is not None and contains_ignore_case(issue.title, text)


def _body_satisfies(q: Qualifier, issue: Issue) -> bool:
    text = _text(q)
    return text is not None and contains_ignore_case(issue.description, text)


def _milestone_satisfies(q: Qualifier, model: Model, issue: Issue) -> bool:
    text = _text(q)
    if text is None:
        return False
    milestone = model.milestone_of(issue)
    return milestone is not None and contains_ignore_case(milestone.title, text)


def _labels_satisfy(q: Qualifier, model: Model, issue: Issue) -> bool:
    text = _text(q)
    if text is None:
        return False

    group, name, _ = split_label(normalize(text))
    group = group or ""

    for label in model.labels_of(issue):
        if label.group is not None:
            if contains_ignore_case(label.group, group) and contains_ignore_case(label.name, name):
                return True
        else:
            # The first ungrouped label decides the result
            return contains_ignore_case(label.name, name)
    return False


def _author_satisfies(q: Qualifier, issue: Issue) -> bool:
    text = _text(q)
    return text is not None and contains_ignore_case(issue.creator, text)


def _assignee_satisfies(q: Qualifier, model: Model, issue: Issue) -> bool:
    text = _text(q)
    if text is None:
        return False
    assignee = model.assignee_of(issue)
    if assignee is None:
        return False
    return contains_ignore_case(assignee.login, text) or contains_ignore_case(assignee.name, text)


def _type_satisfies(q: Qualifier, issue: Issue) -> bool:
    match normalize(_text(q)):
        case "issue":
            return not issue.is_pull_request
        case "pr" | "pullrequest":
            return issue.is_pull_request
        case _:
            return False


def _state_satisfies(q: Qualifier, issue: Issue) -> bool:
    state = normalize(_text(q))
    if "open" in state:
        return issue.is_open
    elif "closed" in state:
        return not issue.is_open
    return False


def _has_satisfies(q: Qualifier, issue: Issue) -> bool:
    match q.content:
        case "label" | "labels":
            return len(issue.labels) > 0
        case "milestone" | "milestones":
            return issue.milestone is not None
        case "assignee" | "assignees":
            return issue.assignee is not None
        case _:
            return False


def _is_satisfies(q: Qualifier, issue: Issue) -> bool:
    match q.content:
        case "open" | "closed":
            return _state_satisfies(q, issue)
        case "pr" | "issue":
            return _type_satisfies(q, issue)
        case "merged":
            return issue.is_pull_request and not issue.is_open
        case "unmerged":
            return issue.is_pull_request and issue.is_open
        case _:
            return False


def _created_satisfies(q: Qualifier, issue: Issue) -> bool:
    created = issue.created_at.date()
    match q.content:
        case DateRange():
            return q.content.encloses(created)
        case date():
            return created == q.content
        case _:
            return False


def _updated_satisfies(q: Qualifier, issue: Issue, now: datetime | None) -> bool:
    hours = hours_between(issue.updated_at, now if now is not None else current_time())
    match q.content:
        case NumberRange():
            return q.content.encloses(hours)
        case int():
            # A bare number means "less than"
            return NumberRange(end=q.content, end_inclusive=False).encloses(hours)
        case _:
            return False
