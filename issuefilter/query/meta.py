# issuefilter/query/meta.py
"""Meta-qualifiers: ``in`` scopes keyword matching, ``repo`` selects the repository.

Neither tests a field the normal way. ``in`` leaves are replaced by EMPTY
before evaluation (so ``NOT in:title`` is never satisfied), and a filter without
a ``repo`` leaf is implicitly restricted to the model's default repository.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from issuefilter.clock import current_time
from issuefilter.model import Model
from issuefilter.models import Issue
from issuefilter.query.combinators import (
    Conjunction,
    FilterExpression,
    Qualifier,
    filter_qualifiers,
    find_qualifiers,
)
from issuefilter.query.evaluate import is_satisfied_by
from issuefilter.query.keywords import META_QUALIFIERS, STRIPPED_QUALIFIERS

logger = logging.getLogger(__name__)


def is_meta_qualifier(q: Qualifier) -> bool:
    return q.name in META_QUALIFIERS


def should_be_stripped(q: Qualifier) -> bool:
    return q.name in STRIPPED_QUALIFIERS


@dataclass(frozen=True)
class MetaQualifierInfo:
    """Snapshot of the meta-qualifiers found in a filter."""

    qualifiers: tuple[Qualifier, ...] = ()

    @property
    def in_scope(self) -> str | None:
        """Lower-cased content of the first ``in`` qualifier, if any."""
        for q in self.qualifiers:
            if q.name == "in" and isinstance(q.content, str):
                return q.content.lower()
        return None

    @property
    def repos(self) -> tuple[str, ...]:
        return tuple(
            q.content for q in self.qualifiers if q.name == "repo" and isinstance(q.content, str)
        )

    @property
    def has_repo(self) -> bool:
        return any(q.name == "repo" for q in self.qualifiers)


def process(
    model: Model,
    expr: FilterExpression,
    issue: Issue,
    now: datetime | None = None,
) -> bool:
    """Test ``issue`` against ``expr``, honouring meta-qualifiers.

    Always prefer this over calling is_satisfied_by directly. A filter without a
    ``repo`` qualifier only matches issues of ``model.default_repo``, so even
    EMPTY rejects issues from other repositories.

    Args:
        model: Lookup for the issue's labels, milestone and assignee
        expr: Parsed filter
        issue: Issue to test
        now: Instant that time-relative qualifiers measure against;
            defaults to issuefilter.clock.current_time()
    """
    normal = filter_qualifiers(expr, lambda q: not should_be_stripped(q))
    info = MetaQualifierInfo(tuple(find_qualifiers(expr, is_meta_qualifier)))

    if not info.has_repo:
        normal = Conjunction(Qualifier("repo", model.default_repo), normal)

    if now is None:
        now = current_time()
    return is_satisfied_by(normal, model, issue, info, now)


def filter_issues(
    model: Model,
    expr: FilterExpression,
    issues: list[Issue],
    now: datetime | None = None,
) -> list[Issue]:
    """Issues satisfying ``expr``, in their original order, measured at one instant."""
    if now is None:
        now = current_time()
    matched = [issue for issue in issues if process(model, expr, issue, now)]
    logger.debug("Filter %s matched %s of %s issues", expr, len(matched), len(issues))
    return matched


def process_meta_qualifier_effects(
    expr: FilterExpression, callback: Callable[[Qualifier], None]
) -> None:
    """Invoke ``callback`` on every meta-qualifier of ``expr``, in pre-order."""
    for q in find_qualifiers(expr, is_meta_qualifier):
        logger.debug("Meta-qualifier %s", q)
        callback(q)
