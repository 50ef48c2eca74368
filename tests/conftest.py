# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from issuefilter import clock
from issuefilter.model import InMemoryModel
from issuefilter.models import Issue, Label, Milestone, User
from issuefilter.query import parse, process

REPO = "hubturbo/hubturbo"
NOW = datetime(2015, 6, 1, 12, 0)

LABELS = (
    Label("type.bug"),
    Label("type.feature"),
    Label("priority-high"),
    Label("documentation"),
    Label("status.in progress"),
)
MILESTONES = (
    Milestone(1, "v1.0"),
    Milestone(2, "v2.0"),
    Milestone(3, "Release candidate"),
)
USERS = (
    User("alice", "Alice Liddell"),
    User("bob", "Bob Builder"),
    User("carol"),
)


@pytest.fixture(autouse=True)
def _reset_clock():
    yield
    clock.reset_current_time()


@pytest.fixture
def model() -> InMemoryModel:
    return InMemoryModel(REPO, labels=LABELS, milestones=MILESTONES, users=USERS)


def make_issue(**overrides) -> Issue:
    fields = {
        "id": 1,
        "title": "Crash on startup",
        "creator": "alice",
        "repo_id": REPO,
        "description": "The app crashes when opened",
        "created_at": datetime(2015, 5, 20, 9, 30),
        "updated_at": NOW - timedelta(hours=2),
    }
    fields.update(overrides)
    return Issue(**fields)


def matches(model: InMemoryModel, query: str, issue: Issue) -> bool:
    return process(model, parse(query), issue, now=NOW)
