# tests/test_models.py
from issuefilter.model import InMemoryModel
from issuefilter.models import Issue, Label, Milestone, User, split_label

from tests.conftest import REPO, make_issue


def test_split_label_exclusive_group():
    assert split_label("type.bug") == ("type", "bug", ".")


def test_split_label_nonexclusive_group():
    assert split_label("priority-high") == ("priority", "high", "-")


def test_split_label_without_group():
    assert split_label("bug") == (None, "bug", None)
    assert split_label(".hidden") == (None, ".hidden", None)


def test_split_label_uses_first_delimiter():
    assert split_label("status.in-progress") == ("status", "in-progress", ".")


def test_label_properties():
    label = Label("type.bug")
    assert label.group == "type"
    assert label.name == "bug"
    assert label.is_exclusive
    assert not Label("priority-high").is_exclusive
    assert Label("bug").group is None
    assert str(label) == "type.bug"
    assert label == Label("type.bug")
    assert Label.__dataclass_fields__.keys() == {"actual_name"}


def test_issue_mutators():
    issue = make_issue()
    issue.add_label(Label("type.bug"))
    issue.add_label(Label("type.bug"))
    issue.set_milestone(Milestone(2, "v2.0"))
    issue.set_assignee(User("bob"))
    issue.set_open(False)

    assert issue.labels == ["type.bug"]
    assert issue.milestone == 2
    assert issue.assignee == "bob"
    assert not issue.is_open

    issue.set_milestone(None)
    issue.set_assignee(None)
    assert issue.milestone is None
    assert issue.assignee is None


def test_in_memory_model_resolves_issue_references(model: InMemoryModel):
    issue = make_issue(labels=["priority-high", "type.bug", "deleted"], milestone=2, assignee="bob")

    assert model.default_repo == REPO
    assert [l.actual_name for l in model.labels_of(issue)] == ["priority-high", "type.bug"]
    assert model.milestone_of(issue) == Milestone(2, "v2.0")
    assert model.assignee_of(issue) == User("bob", "Bob Builder")


def test_in_memory_model_unresolved_references(model: InMemoryModel):
    issue = make_issue(milestone=99, assignee="nobody")
    assert model.labels_of(issue) == []
    assert model.milestone_of(issue) is None
    assert model.assignee_of(issue) is None


def test_issue_defaults():
    issue = Issue(id=7, title="t", creator="c", repo_id=REPO)
    assert issue.is_open
    assert not issue.is_pull_request
    assert issue.labels == []
    assert issue.description == ""
