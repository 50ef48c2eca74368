# issuefilter/query/apply.py
"""Mutating an issue so that it satisfies a single qualifier.

Used when an issue is dropped onto a filtered view: the view's filter must be
a single qualifier naming one concrete value, which is then written to the
issue. The issue is mutated in place with no locking.
"""

import logging
from collections.abc import Callable, Sequence

from issuefilter.model import Model
from issuefilter.models import Issue
from issuefilter.query.combinators import FilterExpression, Qualifier
from issuefilter.text import contains_ignore_case

logger = logging.getLogger(__name__)


class ApplyRejected(ValueError):
    """Raised when a qualifier cannot be applied to an issue.

    ``candidates`` lists the matching names when the rejection is due to
    ambiguity, and is empty otherwise.
    """

    def __init__(
        self, reason: str, qualifier: FilterExpression | None = None, candidates: Sequence[str] = ()
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.qualifier = qualifier
        self.candidates = tuple(candidates)


def can_be_applied(expr: FilterExpression) -> bool:
    """Only single, non-empty qualifiers can be applied to an issue."""
    return isinstance(expr, Qualifier) and not expr.is_empty


def apply_to(expr: FilterExpression, issue: Issue, model: Model) -> None:
    """Change ``issue`` so that it satisfies ``expr``.

    Args:
        expr: A single qualifier, e.g. ``label:bug`` or ``state:closed``
        issue: Issue to modify in place
        model: Supplies the labels, milestones and users that may be applied

    Raises:
        ApplyRejected: if ``expr`` is composite or empty, names a field that
            cannot be changed, or does not identify exactly one target.
    """
    if not isinstance(expr, Qualifier):
        raise ApplyRejected(f"Cannot apply a compound filter: {expr}", expr)
    if expr.is_empty:
        raise ApplyRejected("Cannot apply an empty filter", expr)

    match expr.name:
        case "title" | "desc" | "body" | "keyword":
            raise ApplyRejected(
                "Unnecessary filter: issue text cannot be changed by dragging", expr
            )
        case "id":
            raise ApplyRejected("Unnecessary filter: id is immutable", expr)
        case "created":
            raise ApplyRejected("Unnecessary filter: cannot change issue creation date", expr)
        case "author":
            raise ApplyRejected("Unnecessary filter: cannot change author of issue", expr)
        case "has" | "no" | "is":
            raise ApplyRejected(f"Ambiguous filter: {expr.name}", expr)
        case "involves" | "user":
            raise ApplyRejected(
                "Ambiguous filter: cannot change users involved with issue", expr
            )
        case "milestone":
            milestone = _find_one(expr, "milestone", model.all_milestones(), lambda m: m.title)
            issue.set_milestone(milestone)
            logger.info("Set milestone of #%s to %s", issue.id, milestone.title)
        case "label":
            label = _find_one(expr, "label", model.all_labels(), lambda lbl: lbl.actual_name)
            issue.add_label(label)
            logger.info("Added label %s to #%s", label.actual_name, issue.id)
        case "assignee":
            user = _find_one(expr, "assignee", model.all_users(), lambda u: u.login)
            issue.set_assignee(user)
            logger.info("Assigned #%s to %s", issue.id, user.login)
        case "state" | "status":
            _apply_state(expr, issue)
        case _:
            logger.debug("Qualifier %s has no effect when applied", expr.name)


def _find_one[T](expr: Qualifier, kind: str, candidates: list[T], key: Callable[[T], str]) -> T:
    """The single candidate whose key contains the qualifier's content."""
    if not isinstance(expr.content, str):
        raise ApplyRejected(f"Invalid {kind} {expr.content}", expr)

    matches = [c for c in candidates if contains_ignore_case(key(c), expr.content)]
    if not matches:
        raise ApplyRejected(f"No {kind} matches '{expr.content}'", expr)
    if len(matches) > 1:
        names = [key(m) for m in matches]
        raise ApplyRejected(
            f"Ambiguous filter: can apply any of the following {kind}s: [{', '.join(names)}]",
            expr,
            names,
        )
    return matches[0]


def _apply_state(expr: Qualifier, issue: Issue) -> None:
    if not isinstance(expr.content, str):
        raise ApplyRejected(f"Invalid state {expr.content}", expr)

    state = expr.content.lower()
    if "open" in state:
        issue.set_open(True)
    elif "closed" in state:
        issue.set_open(False)
    else:
        logger.debug("State '%s' names neither open nor closed; issue unchanged", expr.content)
