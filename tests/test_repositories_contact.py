"""
Tests for moodhome.repositories.contact_repo and execution_repo.
"""
from moodhome.repositories import contact_repo as repo
from moodhome.repositories.execution_repo import get_recent_executions
from moodhome.services.lifecycle import execute_suggestion


class TestContacts:
    def test_crud(self, db_session):
        c = repo.create_contact(db_session, "Alex", "555-0101", "family")
        assert c.id and c.added_at
        assert c.is_frequent is False
        repo.update_contact(db_session, c, {"is_frequent": True, "id": "hijack"})
        assert repo.get_contact(db_session, c.id).is_frequent is True
        assert repo.delete_contact(db_session, c.id) is True
        assert repo.get_contact(db_session, c.id) is None

    def test_list_by_name(self, db_session):
        for name in ("Zoe", "Ann", "Max"):
            repo.create_contact(db_session, name, "1", "friend")
        assert [c.name for c in repo.list_contacts(db_session)] == ["Ann", "Max", "Zoe"]

    def test_frequent_order(self, db_session):
        a = repo.create_contact(db_session, "A", "1", "friend", is_frequent=True)
        b = repo.create_contact(db_session, "B", "2", "friend", is_frequent=True)
        repo.create_contact(db_session, "C", "3", "friend", is_frequent=True)
        repo.create_contact(db_session, "D", "4", "friend")
        repo.mark_contacted(db_session, a, when=100)
        repo.mark_contacted(db_session, b, when=200)
        assert [c.name for c in repo.get_frequent_contacts(db_session)] == ["B", "A", "C"]
        assert len(repo.get_frequent_contacts(db_session, limit=2)) == 2


class TestExecutions:
    def test_recent_newest_first(self, db_session, make_suggestion):
        for t in range(3):
            execute_suggestion(db_session, make_suggestion("LOW", t))
        recent = get_recent_executions(db_session, limit=2)
        assert len(recent) == 2
        assert recent[0].executed_at > recent[1].executed_at
