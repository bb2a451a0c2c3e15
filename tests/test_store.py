"""Tests for the knowledge store."""

import pytest
from pathlib import Path

from cca.errors import (
    DomainAlreadyExists,
    DomainNotFound,
    InvalidName,
    TopicAlreadyExists,
    TopicNotFound,
)
from cca.memory.store import APPEND_SEPARATOR, KnowledgeStore


@pytest.fixture
def store(tmp_path: Path) -> KnowledgeStore:
    return KnowledgeStore(tmp_path / "memory")


class TestWrite:
    def test_round_trip(self, store: KnowledgeStore):
        store.write("demo", "Architecture", "overview", "# Overview\n\nLayers.")
        assert store.read_topic("demo", "Architecture", "overview") == "# Overview\n\nLayers."

    def test_creates_domain_and_returns_absolute_path(self, store: KnowledgeStore):
        path = store.write("demo", "API", "endpoints", "GET /users")
        assert path.is_absolute()
        assert path == (store.root / "demo" / "API" / "endpoints.md").resolve()
        assert store.domain_exists("demo", "API")

    def test_overwrites(self, store: KnowledgeStore):
        store.write("demo", "API", "endpoints", "old")
        store.write("demo", "API", "endpoints", "new")
        assert store.read_topic("demo", "API", "endpoints") == "new"

    def test_names_used_verbatim(self, store: KnowledgeStore):
        store.write("demo", "Data Model", "User Accounts", "x")
        assert (store.root / "demo" / "Data Model" / "User Accounts.md").is_file()

    @pytest.mark.parametrize("bad", ["", "..", "a/b", "a\\b"])
    def test_rejects_names_that_escape(self, store: KnowledgeStore, bad: str):
        with pytest.raises(InvalidName):
            store.write("demo", bad, "topic", "x")


class TestCreateTopic:
    def test_requires_existing_domain(self, store: KnowledgeStore):
        store.init_project("demo")
        with pytest.raises(DomainNotFound):
            store.create_topic("demo", "Missing", "topic", "x")
        assert not (store.root / "demo" / "Missing").exists()

    def test_refuses_existing_topic(self, store: KnowledgeStore):
        store.write("demo", "API", "endpoints", "original")
        with pytest.raises(TopicAlreadyExists):
            store.create_topic("demo", "API", "endpoints", "replacement")
        assert store.read_topic("demo", "API", "endpoints") == "original"

    def test_creates_in_existing_domain(self, store: KnowledgeStore):
        store.create_domain("demo", "API")
        store.create_topic("demo", "API", "errors", "4xx and 5xx")
        assert store.read_topic("demo", "API", "errors") == "4xx and 5xx"


class TestCreateDomain:
    def test_idempotent_by_default(self, store: KnowledgeStore):
        store.create_domain("demo", "API")
        store.create_domain("demo", "API")
        assert store.domain_exists("demo", "API")

    def test_strict_mode_refuses_existing(self, store: KnowledgeStore):
        store.create_domain("demo", "API")
        with pytest.raises(DomainAlreadyExists):
            store.create_domain("demo", "API", exist_ok=False)


class TestUpdateTopic:
    def test_replace(self, store: KnowledgeStore):
        store.write("demo", "API", "endpoints", "A")
        store.update_topic("demo", "API", "endpoints", "B")
        assert store.read_topic("demo", "API", "endpoints") == "B"

    def test_append_keeps_order(self, store: KnowledgeStore):
        store.write("demo", "API", "endpoints", "A")
        store.update_topic("demo", "API", "endpoints", "B", append=True)
        assert store.read_topic("demo", "API", "endpoints") == "A" + APPEND_SEPARATOR + "B"

    def test_append_is_not_idempotent(self, store: KnowledgeStore):
        store.write("demo", "API", "endpoints", "A")
        store.update_topic("demo", "API", "endpoints", "B", append=True)
        store.update_topic("demo", "API", "endpoints", "B", append=True)
        assert store.read_topic("demo", "API", "endpoints").count("B") == 2

    def test_missing_topic(self, store: KnowledgeStore):
        store.create_domain("demo", "API")
        with pytest.raises(TopicNotFound, match="API/endpoints.md does not exist"):
            store.update_topic("demo", "API", "endpoints", "x")
        assert not store.topic_exists("demo", "API", "endpoints")


class TestRead:
    def test_missing_topic_is_none(self, store: KnowledgeStore):
        assert store.read_topic("demo", "API", "nothing") is None

    def test_read_domain(self, store: KnowledgeStore):
        store.write("demo", "API", "b", "second")
        store.write("demo", "API", "a", "first")
        topics = store.read_domain("demo", "API")
        assert [t.topic for t in topics] == ["a", "b"]
        assert topics[0].content == "first"
        assert topics[0].domain == "API"

    def test_read_missing_domain(self, store: KnowledgeStore):
        assert store.read_domain("demo", "API") == []

    def test_project_structure(self, store: KnowledgeStore):
        store.write("demo", "Backend", "services", "x")
        store.write("demo", "API", "endpoints", "x")
        store.write("demo", "API", "auth", "x")
        store.create_domain("demo", "Empty")
        store.exploration_path("demo").write_text("exploration")

        structure = store.list_project_structure("demo")
        assert structure.project == "demo"
        assert [d.name for d in structure.domains] == ["API", "Backend", "Empty"]
        assert structure.domains[0].topics == ["auth", "endpoints"]
        assert structure.domains[2].topics == []

    def test_project_structure_missing(self, store: KnowledgeStore):
        assert store.list_project_structure("demo") is None


class TestListProjects:
    def test_missing_base(self, store: KnowledgeStore):
        assert not store.root.exists()
        assert store.list_projects() == []

    def test_empty_base(self, store: KnowledgeStore):
        store.root.mkdir(parents=True)
        assert store.list_projects() == []

    def test_only_directories(self, store: KnowledgeStore):
        store.init_project("beta")
        store.init_project("alpha")
        (store.root / "stray.txt").write_text("x")
        assert store.list_projects() == ["alpha", "beta"]


class TestDelete:
    def test_delete_topic(self, store: KnowledgeStore):
        store.write("demo", "API", "endpoints", "x")
        assert store.delete_topic("demo", "API", "endpoints") is True
        assert not store.topic_exists("demo", "API", "endpoints")
        assert store.delete_topic("demo", "API", "endpoints") is False

    def test_delete_domain_removes_topics(self, store: KnowledgeStore):
        store.write("demo", "API", "a", "x")
        store.write("demo", "API", "b", "x")
        assert store.delete_domain("demo", "API") is True
        assert not store.domain_exists("demo", "API")

    def test_delete_missing_domain(self, store: KnowledgeStore):
        store.init_project("demo")
        assert store.delete_domain("demo", "API") is False

    def test_delete_project(self, store: KnowledgeStore):
        store.write("demo", "API", "a", "x")
        assert store.delete_project("demo") is True
        assert store.list_projects() == []

    def test_delete_missing_project_leaves_tree(self, store: KnowledgeStore):
        store.write("other", "API", "a", "x")
        assert store.delete_project("demo") is False
        assert store.list_projects() == ["other"]
        assert store.read_topic("other", "API", "a") == "x"


class TestRename:
    def test_rename_topic(self, store: KnowledgeStore):
        store.write("demo", "API", "old", "content")
        assert store.rename_topic("demo", "API", "old", "new") is True
        assert store.read_topic("demo", "API", "new") == "content"
        assert store.read_topic("demo", "API", "old") is None

    def test_rename_missing_topic(self, store: KnowledgeStore):
        assert store.rename_topic("demo", "API", "old", "new") is False

    def test_rename_domain(self, store: KnowledgeStore):
        store.write("demo", "Api", "endpoints", "content")
        assert store.rename_domain("demo", "Api", "HTTP") is True
        assert store.read_topic("demo", "HTTP", "endpoints") == "content"
        assert not store.domain_exists("demo", "Api")

    def test_rename_missing_domain(self, store: KnowledgeStore):
        assert store.rename_domain("demo", "Api", "HTTP") is False
