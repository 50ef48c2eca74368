# issuefilter/models.py
from dataclasses import dataclass, field
from datetime import datetime

EXCLUSIVE_DELIMITER = "."
NONEXCLUSIVE_DELIMITER = "-"


def split_label(text: str) -> tuple[str | None, str, str | None]:
    """Split a label name into (group, name, delimiter).

    The group is everything before the first delimiter, provided it is
    non-empty: ``type.bug`` -> ("type", "bug", "."), ``bug`` -> (None, "bug", None).
    """
    for i, ch in enumerate(text):
        if ch in (EXCLUSIVE_DELIMITER, NONEXCLUSIVE_DELIMITER):
            if i == 0:
                break
            return text[:i], text[i + 1 :], ch
    return None, text, None


@dataclass(frozen=True)
class Label:
    """Repository label; ``actual_name`` is the full name as stored upstream."""

    actual_name: str

    @property
    def group(self) -> str | None:
        return split_label(self.actual_name)[0]

    @property
    def name(self) -> str:
        return split_label(self.actual_name)[1]

    @property
    def is_exclusive(self) -> bool:
        return split_label(self.actual_name)[2] == EXCLUSIVE_DELIMITER

    def __str__(self) -> str:
        return self.actual_name


@dataclass(frozen=True)
class Milestone:
    id: int
    title: str
    is_open: bool = True

    def __str__(self) -> str:
        return self.title


@dataclass(frozen=True)
class User:
    """Repository collaborator; ``name`` is the optional display name."""

    login: str
    name: str | None = None

    def __str__(self) -> str:
        return self.login


@dataclass
class Issue:
    """Issue or pull request as seen by filters.

    Labels are stored by actual name, the milestone by id and the assignee by
    login; a Model resolves them to full records.
    """

    # Required fields
    id: int
    title: str
    creator: str
    repo_id: str

    # Optional fields
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    is_open: bool = True
    is_pull_request: bool = False
    labels: list[str] = field(default_factory=list)
    milestone: int | None = None
    assignee: str | None = None

    def add_label(self, label: Label) -> None:
        if label.actual_name not in self.labels:
            self.labels.append(label.actual_name)

    def set_milestone(self, milestone: Milestone | None) -> None:
        self.milestone = milestone.id if milestone else None

    def set_assignee(self, user: User | None) -> None:
        self.assignee = user.login if user else None

    def set_open(self, is_open: bool) -> None:
        self.is_open = is_open
