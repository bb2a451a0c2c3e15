"""Project resolution — which project does a request target?"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from cca.errors import ProjectAmbiguous, ProjectUnresolvable

if TYPE_CHECKING:
    from cca.memory.store import KnowledgeStore

logger = logging.getLogger(__name__)


@dataclass
class ResolvedProject:
    name: str
    codebase_path: Path


class ProjectResolver:
    """Map (name?, path?, cwd) to exactly one project name.

    Order, first match wins: explicit name, basename of explicit path,
    basename of cwd if that project exists, the only project in the store.
    Resolution does not check that the resolved project has a store entry.
    """

    def __init__(self, store: KnowledgeStore) -> None:
        self.store = store

    def resolve(
        self,
        project_name: str | None = None,
        project_path: str | Path | None = None,
        cwd: str | Path | None = None,
    ) -> str:
        if project_name:
            return project_name

        if project_path:
            return Path(project_path).expanduser().resolve().name

        cwd_name = Path(cwd or Path.cwd()).name
        projects = self.store.list_projects()

        if cwd_name in projects:
            logger.debug("Resolved project from cwd: %s", cwd_name)
            return cwd_name

        if len(projects) == 1:
            logger.debug("Resolved single existing project: %s", projects[0])
            return projects[0]

        if not projects:
            raise ProjectUnresolvable(
                "No projects have been initialized. Use init_project first."
            )
        raise ProjectAmbiguous(
            f"Could not determine project. Available projects: {', '.join(projects)}. "
            "Please specify project_name or project_path.",
            candidates=projects,
        )

    def resolve_codebase(
        self,
        project_name: str | None = None,
        project_path: str | Path | None = None,
        cwd: str | Path | None = None,
    ) -> ResolvedProject:
        """Resolve the project plus the codebase it was built from.

        Without an explicit path the current directory is the best guess.
        """
        name = self.resolve(project_name, project_path, cwd)
        if project_path:
            codebase = Path(project_path).expanduser().resolve()
        else:
            codebase = Path(cwd or Path.cwd()).resolve()
        return ResolvedProject(name=name, codebase_path=codebase)
