# issuefilter/query/keywords.py
"""Qualifier names understood by the filter language, for validation and completion."""

QUALIFIER_NAMES = (
    "id",
    "keyword",
    "title",
    "body",
    "desc",
    "milestone",
    "label",
    "author",
    "assignee",
    "involves",
    "user",
    "type",
    "state",
    "status",
    "has",
    "no",
    "is",
    "created",
    "updated",
    "repo",
    "in",
)

META_QUALIFIERS = frozenset({"in", "repo"})

# Meta-qualifiers removed from the tree before evaluation
STRIPPED_QUALIFIERS = frozenset({"in"})

DATE_QUALIFIERS = frozenset({"created"})
NUMBER_QUALIFIERS = frozenset({"id", "updated"})

# Well-known values of the enumerated qualifiers
QUALIFIER_VALUES = {
    "type": ("issue", "pr", "pullrequest"),
    "state": ("open", "closed"),
    "status": ("open", "closed"),
    "has": ("label", "labels", "milestone", "milestones", "assignee", "assignees"),
    "no": ("label", "labels", "milestone", "milestones", "assignee", "assignees"),
    "is": ("open", "closed", "pr", "issue", "merged", "unmerged"),
    "in": ("title", "body", "desc"),
}

COMPLETION_KEYWORDS: tuple[str, ...] = tuple(
    sorted(set(QUALIFIER_NAMES) | {v for values in QUALIFIER_VALUES.values() for v in values})
)


def is_known_qualifier(name: str) -> bool:
    return name in QUALIFIER_NAMES


def matching_keywords(fragment: str, limit: int | None = None) -> list[str]:
    """Completion keywords containing ``fragment`` (case-insensitive), sorted."""
    fragment = fragment.lower()
    matches = [k for k in COMPLETION_KEYWORDS if fragment in k]
    return matches[:limit] if limit is not None else matches
