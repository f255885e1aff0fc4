"""
Tests for session, jury and student management
"""
import pytest

from evaltrack.core.aggregator import SubmissionAggregator
from evaltrack.core.registry import SessionRegistry
from evaltrack.core.store import MemoryDocumentStore
from evaltrack.errors import Forbidden, NotFound, ValidationError


class CountingStore(MemoryDocumentStore):
    def __init__(self):
        super().__init__()
        self.saves = 0

    def save(self):
        self.saves += 1


def test_create_session(registry, store):
    session = registry.create("C#22", "Toulouse")
    assert session.name == "C#22"
    assert session.campus == "Toulouse"
    assert session.juries == []
    assert session.students == []
    assert store.document.sessions[0].id == session.id


def test_create_assigns_unique_ids(registry):
    ids = {registry.create(f"S{i}", "Toulouse").id for i in range(20)}
    assert len(ids) == 20


@pytest.mark.parametrize("name", ["", None])
def test_create_requires_name(registry, store, name):
    with pytest.raises(ValidationError, match="Session name is required."):
        registry.create(name, "Toulouse")
    assert store.document.sessions == []


def test_every_mutation_saves():
    store = CountingStore()
    registry = SessionRegistry(store)

    session = registry.create("C#22", "Toulouse")
    registry.add_jury(session.id, "Toulouse", "Hugo")
    registry.add_student(session.id, "Toulouse", "Fabien")
    registry.remove_jury(session.id, "Toulouse", "Hugo")
    registry.remove_student(session.id, "Toulouse", "Fabien")
    registry.delete(session.id, "Toulouse")
    assert store.saves == 6


def test_list_filters_by_campus_in_insertion_order(registry):
    first = registry.create("B", "Toulouse")
    registry.create("Other", "Paris")
    second = registry.create("A", "Toulouse")

    assert [s.id for s in registry.list("Toulouse")] == [first.id, second.id]
    assert [s.name for s in registry.list("Paris")] == ["Other"]
    assert registry.list("Lille") == []


def test_delete_unknown_session(registry):
    with pytest.raises(NotFound, match="Session not found."):
        registry.delete("missing", "Toulouse")


def test_delete_other_campus_forbidden(registry):
    session = registry.create("C#22", "Toulouse")
    with pytest.raises(Forbidden):
        registry.delete(session.id, "Paris")
    assert len(registry.list("Toulouse")) == 1


def test_delete_cascades_submissions(registry, store, make_form):
    """Deleting a session drops its submissions, not others'"""
    aggregator = SubmissionAggregator(store)
    kept = registry.create("Keep", "Toulouse")
    gone = registry.create("Gone", "Toulouse")
    for session in (kept, gone):
        registry.add_jury(session.id, "Toulouse", "Hugo")
        registry.add_student(session.id, "Toulouse", "Fabien")
        aggregator.submit(make_form(session.id), "Toulouse")
        aggregator.submit(make_form(session.id), "Toulouse")

    registry.delete(gone.id, "Toulouse")

    assert [s.session_id for s in store.document.submissions] == [kept.id, kept.id]
    assert registry.list("Toulouse")[0].id == kept.id


def test_add_members_allows_duplicates(registry):
    session = registry.create("C#22", "Toulouse")
    registry.add_jury(session.id, "Toulouse", "Hugo")
    updated = registry.add_jury(session.id, "Toulouse", "Hugo")
    assert updated.juries == ["Hugo", "Hugo"]

    updated = registry.add_student(session.id, "Toulouse", "Fabien")
    assert updated.students == ["Fabien"]


def test_remove_deletes_all_matches(registry):
    session = registry.create("C#22", "Toulouse")
    for name in ("Hugo", "Lea", "Hugo"):
        registry.add_jury(session.id, "Toulouse", name)

    updated = registry.remove_jury(session.id, "Toulouse", "Hugo")
    assert updated.juries == ["Lea"]


def test_remove_absent_name_is_noop(registry):
    session = registry.create("C#22", "Toulouse")
    registry.add_student(session.id, "Toulouse", "Fabien")

    updated = registry.remove_student(session.id, "Toulouse", "Nobody")
    assert updated.students == ["Fabien"]
    updated = registry.remove_jury(session.id, "Toulouse", None)
    assert updated.juries == []


def test_add_requires_name_before_lookup(registry):
    """Empty name → ValidationError even for an unknown session"""
    with pytest.raises(ValidationError, match="Jury name is required."):
        registry.add_jury("missing", "Toulouse", "")
    with pytest.raises(ValidationError, match="Student name is required."):
        registry.add_student("missing", "Toulouse", None)


def test_member_changes_check_ownership(registry):
    session = registry.create("C#22", "Toulouse")
    with pytest.raises(Forbidden):
        registry.add_jury(session.id, "Paris", "Hugo")
    with pytest.raises(Forbidden):
        registry.remove_student(session.id, "Paris", "Fabien")
    with pytest.raises(NotFound):
        registry.add_student("missing", "Toulouse", "Fabien")

    assert registry.get(session.id, "Toulouse").juries == []


def test_returned_session_is_detached(registry, store):
    session = registry.create("C#22", "Toulouse")
    session.juries.append("Hugo")
    assert store.document.sessions[0].juries == []


def test_numeric_member_names_stored_as_strings(registry):
    """Names sent as JSON numbers are stored and removed as strings"""
    session = registry.create(22, "Toulouse")
    assert session.name == "22"

    registry.add_jury(session.id, "Toulouse", 5)
    assert registry.add_student(session.id, "Toulouse", 7).students == ["7"]
    assert registry.get(session.id, "Toulouse").juries == ["5"]

    assert registry.remove_jury(session.id, "Toulouse", 5).juries == []
