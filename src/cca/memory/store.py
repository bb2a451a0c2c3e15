"""Knowledge store — the project/domain/topic tree on disk.

Markdown files are the only state. There is no index and no cache: every
call reads or writes the filesystem directly, so each operation is an
independent, non-atomic step. Nothing here guards against a concurrent
writer racing between an existence check and the write that follows it.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from cca.errors import (
    DomainAlreadyExists,
    DomainNotFound,
    InvalidName,
    TopicAlreadyExists,
    TopicNotFound,
)

logger = logging.getLogger(__name__)

MEMORY_DIR_NAME = ".context-capturing-agents"
DEFAULT_MEMORY_DIR = Path.home() / MEMORY_DIR_NAME
EXPLORATION_FILE = "EXPLORATION.md"
APPEND_SEPARATOR = "\n\n"


@dataclass
class TopicFile:
    """A topic read back from disk."""

    domain: str
    topic: str
    content: str
    path: Path


@dataclass
class DomainEntry:
    name: str
    topics: list[str] = field(default_factory=list)


@dataclass
class ProjectStructure:
    project: str
    domains: list[DomainEntry] = field(default_factory=list)


def _check_name(name: str, what: str) -> str:
    """Names are used verbatim, but must address exactly one path segment."""
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise InvalidName(f"Invalid {what} name: {name!r}")
    return name


def _topics_in(domain_dir: Path) -> list[str]:
    return sorted(p.stem for p in domain_dir.glob("*.md") if p.is_file())


class KnowledgeStore:
    """CRUD over ``<root>/<project>/<domain>/<topic>.md``."""

    def __init__(self, root: Path = DEFAULT_MEMORY_DIR) -> None:
        self.root = root

    # ── Paths ─────────────────────────────────────────────────

    def project_path(self, project: str) -> Path:
        return self.root / _check_name(project, "project")

    def domain_path(self, project: str, domain: str) -> Path:
        return self.project_path(project) / _check_name(domain, "domain")

    def topic_path(self, project: str, domain: str, topic: str) -> Path:
        return self.domain_path(project, domain) / f"{_check_name(topic, 'topic')}.md"

    def exploration_path(self, project: str) -> Path:
        return self.project_path(project) / EXPLORATION_FILE

    def project_exists(self, project: str) -> bool:
        return self.project_path(project).is_dir()

    def domain_exists(self, project: str, domain: str) -> bool:
        return self.domain_path(project, domain).is_dir()

    def topic_exists(self, project: str, domain: str, topic: str) -> bool:
        return self.topic_path(project, domain, topic).is_file()

    # ── Write ─────────────────────────────────────────────────

    def init_project(self, project: str) -> Path:
        """Ensure the project directory exists. Idempotent."""
        path = self.project_path(project)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write(self, project: str, domain: str, topic: str, content: str) -> Path:
        """Write a topic, creating the domain if needed. Full overwrite."""
        path = self.topic_path(project, domain, topic)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s/%s/%s.md (%d chars)", project, domain, topic, len(content))
        return path.resolve()

    def create_domain(self, project: str, domain: str, exist_ok: bool = True) -> Path:
        """Create a domain directory.

        Idempotent by default; with ``exist_ok=False`` an existing domain
        raises ``DomainAlreadyExists``.
        """
        path = self.domain_path(project, domain)
        if path.is_dir() and not exist_ok:
            raise DomainAlreadyExists(f'Domain "{domain}" already exists.')
        path.mkdir(parents=True, exist_ok=True)
        logger.info("Created domain %s/%s", project, domain)
        return path.resolve()

    def create_topic(self, project: str, domain: str, topic: str, content: str) -> Path:
        """Create a new topic inside an existing domain.

        Strict counterpart of ``write``: the domain must already exist and the
        topic must not.
        """
        domain_dir = self.domain_path(project, domain)
        path = self.topic_path(project, domain, topic)
        if not domain_dir.is_dir():
            raise DomainNotFound(f'Domain "{domain}" does not exist.')
        if path.exists():
            raise TopicAlreadyExists(f"{domain}/{topic}.md already exists.")
        path.write_text(content, encoding="utf-8")
        logger.info("Created topic %s/%s/%s.md", project, domain, topic)
        return path.resolve()

    def update_topic(
        self,
        project: str,
        domain: str,
        topic: str,
        content: str,
        append: bool = False,
    ) -> Path:
        """Replace or append to an existing topic. Append is never idempotent."""
        path = self.topic_path(project, domain, topic)
        if not path.is_file():
            raise TopicNotFound(f"{domain}/{topic}.md does not exist.")
        if append:
            existing = path.read_text(encoding="utf-8")
            content = existing + APPEND_SEPARATOR + content
        path.write_text(content, encoding="utf-8")
        logger.info(
            "%s topic %s/%s/%s.md",
            "Appended to" if append else "Replaced",
            project,
            domain,
            topic,
        )
        return path.resolve()

    # ── Read ──────────────────────────────────────────────────

    def read_topic(self, project: str, domain: str, topic: str) -> str | None:
        path = self.topic_path(project, domain, topic)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def read_domain(self, project: str, domain: str) -> list[TopicFile]:
        """All topics in a domain; empty if the domain is missing."""
        domain_dir = self.domain_path(project, domain)
        if not domain_dir.is_dir():
            return []
        return [
            TopicFile(
                domain=domain,
                topic=name,
                content=(domain_dir / f"{name}.md").read_text(encoding="utf-8"),
                path=(domain_dir / f"{name}.md").resolve(),
            )
            for name in _topics_in(domain_dir)
        ]

    def list_project_structure(self, project: str) -> ProjectStructure | None:
        """Domains and their topics, or None when the project is absent."""
        project_dir = self.project_path(project)
        if not project_dir.is_dir():
            return None
        domains = [
            DomainEntry(name=entry.name, topics=_topics_in(entry))
            for entry in sorted(project_dir.iterdir())
            if entry.is_dir()
        ]
        return ProjectStructure(project=project, domains=domains)

    def list_projects(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(entry.name for entry in self.root.iterdir() if entry.is_dir())

    # ── Delete ────────────────────────────────────────────────

    def delete_topic(self, project: str, domain: str, topic: str) -> bool:
        path = self.topic_path(project, domain, topic)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted topic %s/%s/%s.md", project, domain, topic)
        return True

    def delete_domain(self, project: str, domain: str) -> bool:
        """Remove a domain and every topic in it. No confirmation step."""
        path = self.domain_path(project, domain)
        if not path.exists():
            return False
        topics = _topics_in(path)
        if topics:
            logger.warning(
                "Deleting non-empty domain %s/%s (%d topics)", project, domain, len(topics)
            )
        shutil.rmtree(path)
        logger.info("Deleted domain %s/%s", project, domain)
        return True

    def delete_project(self, project: str) -> bool:
        path = self.project_path(project)
        if not path.exists():
            return False
        shutil.rmtree(path)
        logger.info("Deleted project %s", project)
        return True

    # ── Rename ────────────────────────────────────────────────
    # No collision check: renaming onto an existing name does whatever
    # Path.rename does on the host platform.

    def rename_topic(self, project: str, domain: str, old_topic: str, new_topic: str) -> bool:
        old = self.topic_path(project, domain, old_topic)
        if not old.exists():
            return False
        old.rename(self.topic_path(project, domain, new_topic))
        logger.info("Renamed topic %s/%s: %s -> %s", project, domain, old_topic, new_topic)
        return True

    def rename_domain(self, project: str, old_domain: str, new_domain: str) -> bool:
        old = self.domain_path(project, old_domain)
        if not old.exists():
            return False
        old.rename(self.domain_path(project, new_domain))
        logger.info("Renamed domain %s: %s -> %s", project, old_domain, new_domain)
        return True
