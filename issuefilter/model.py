# issuefilter/model.py
"""Read-only view of repository data that filters resolve issues against."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from issuefilter.models import Issue, Label, Milestone, User


class Model(ABC):
    """Lookup capability used by evaluation and apply."""

    @property
    @abstractmethod
    def default_repo(self) -> str:
        """Repository implied when a filter names none."""
        ...

    @abstractmethod
    def all_labels(self) -> list[Label]: ...

    @abstractmethod
    def all_milestones(self) -> list[Milestone]: ...

    @abstractmethod
    def all_users(self) -> list[User]: ...

    def labels_of(self, issue: Issue) -> list[Label]:
        """Labels attached to ``issue``, in the issue's order."""
        by_name = {label.actual_name: label for label in self.all_labels()}
        return [by_name[name] for name in issue.labels if name in by_name]

    def milestone_of(self, issue: Issue) -> Milestone | None:
        if issue.milestone is None:
            return None
        for milestone in self.all_milestones():
            if milestone.id == issue.milestone:
                return milestone
        return None

    def assignee_of(self, issue: Issue) -> User | None:
        if issue.assignee is None:
            return None
        for user in self.all_users():
            if user.login == issue.assignee:
                return user
        return None


class InMemoryModel(Model):
    """Model backed by fixed catalogs of labels, milestones and users."""

    def __init__(
        self,
        default_repo: str,
        labels: Iterable[Label] = (),
        milestones: Iterable[Milestone] = (),
        users: Iterable[User] = (),
    ) -> None:
        self._default_repo = default_repo
        self._labels = list(labels)
        self._milestones = list(milestones)
        self._users = list(users)

    @property
    def default_repo(self) -> str:
        return self._default_repo

    def all_labels(self) -> list[Label]:
        return list(self._labels)

    def all_milestones(self) -> list[Milestone]:
        return list(self._milestones)

    def all_users(self) -> list[User]:
        return list(self._users)
