"""Tests for project resolution."""

import pytest
from pathlib import Path

from cca.errors import ProjectAmbiguous, ProjectUnresolvable
from cca.memory.resolver import ProjectResolver
from cca.memory.store import KnowledgeStore


@pytest.fixture
def store(tmp_path: Path) -> KnowledgeStore:
    return KnowledgeStore(tmp_path / "memory")


@pytest.fixture
def resolver(store: KnowledgeStore) -> ProjectResolver:
    return ProjectResolver(store)


class TestResolve:
    def test_explicit_name_wins(self, store, resolver: ProjectResolver):
        store.init_project("demo")
        assert resolver.resolve("named", "/some/where/else", cwd="/x/demo") == "named"

    def test_explicit_name_need_not_exist(self, resolver: ProjectResolver):
        assert resolver.resolve("ghost") == "ghost"

    def test_path_basename(self, tmp_path: Path, resolver: ProjectResolver):
        project_dir = tmp_path / "repos" / "my-app"
        project_dir.mkdir(parents=True)
        assert resolver.resolve(project_path=str(project_dir)) == "my-app"

    def test_path_is_normalized(self, tmp_path: Path, resolver: ProjectResolver):
        (tmp_path / "my-app" / "src").mkdir(parents=True)
        assert resolver.resolve(project_path=str(tmp_path / "my-app" / "src" / "..")) == "my-app"

    def test_single_project_fallback(self, store, resolver: ProjectResolver):
        store.init_project("demo")
        assert resolver.resolve(cwd="/work/other") == "demo"

    def test_cwd_match_among_many(self, store, resolver: ProjectResolver):
        store.init_project("demo1")
        store.init_project("demo2")
        assert resolver.resolve(cwd="/work/demo1") == "demo1"

    def test_ambiguous(self, store, resolver: ProjectResolver):
        store.init_project("demo1")
        store.init_project("demo2")
        with pytest.raises(ProjectAmbiguous) as exc_info:
            resolver.resolve(cwd="/work/unrelated")
        assert exc_info.value.candidates == ["demo1", "demo2"]
        assert "demo1, demo2" in str(exc_info.value)
        assert "project_name or project_path" in str(exc_info.value)

    def test_ambiguous_is_unresolvable(self, store, resolver: ProjectResolver):
        store.init_project("demo1")
        store.init_project("demo2")
        with pytest.raises(ProjectUnresolvable):
            resolver.resolve(cwd="/work/unrelated")

    def test_empty_store(self, resolver: ProjectResolver):
        with pytest.raises(ProjectUnresolvable, match="No projects have been initialized"):
            resolver.resolve(cwd="/work/anything")

    def test_defaults_to_process_cwd(self, tmp_path: Path, store, resolver, monkeypatch):
        work = tmp_path / "demo2"
        work.mkdir()
        monkeypatch.chdir(work)
        store.init_project("demo1")
        store.init_project("demo2")
        assert resolver.resolve() == "demo2"


class TestResolveCodebase:
    def test_explicit_path(self, tmp_path: Path, resolver: ProjectResolver):
        project_dir = tmp_path / "my-app"
        project_dir.mkdir()
        resolved = resolver.resolve_codebase(project_path=str(project_dir))
        assert resolved.name == "my-app"
        assert resolved.codebase_path == project_dir.resolve()

    def test_falls_back_to_cwd(self, tmp_path: Path, store, resolver: ProjectResolver):
        store.init_project("demo")
        resolved = resolver.resolve_codebase("demo", cwd=tmp_path)
        assert resolved.name == "demo"
        assert resolved.codebase_path == tmp_path.resolve()
