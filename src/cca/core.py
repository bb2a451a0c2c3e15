"""Orchestration entrypoints — init, search, update.

Each entrypoint:
1. Validates its input
2. Resolves the target project (ProjectResolver)
3. Checks the project's store directory where required
4. Runs one or two agents to completion through the injected engine
5. Reports a terminal result — failures never escape as exceptions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from cca.agents.runner import run_explorer, run_searcher, run_updater, run_writer
from cca.config import CCAConfig
from cca.errors import (
    CCAError,
    EmptyInput,
    ExplorationIncomplete,
    PathNotFound,
    ProjectContextMissing,
)
from cca.memory.resolver import ProjectResolver
from cca.memory.store import KnowledgeStore

if TYPE_CHECKING:
    from cca.engines.base import Engine
    from cca.memory.store import ProjectStructure

logger = logging.getLogger(__name__)


@dataclass
class InitResult:
    success: bool
    project_name: str
    memory_path: str
    error: str | None = None
    error_kind: str | None = None


@dataclass
class SearchResult:
    success: bool
    project_name: str
    query: str
    result: str = ""
    error: str | None = None
    error_kind: str | None = None


@dataclass
class UpdateResult:
    success: bool
    project_name: str
    context: str
    result: str = ""
    error: str | None = None
    error_kind: str | None = None


def _kind(exc: Exception) -> str:
    return exc.kind if isinstance(exc, CCAError) else type(exc).__name__


def build_engine(config: CCAConfig) -> Engine:
    """Construct the configured engine. The caller owns it."""
    name = config.engine.name
    if name == "anthropic_api":
        from cca.engines.anthropic_api import AnthropicAgentEngine

        return AnthropicAgentEngine(
            model=config.engine.model,
            max_tokens=config.engine.max_tokens,
            temperature=config.engine.temperature,
            timeout=config.engine.timeout,
        )
    raise ValueError(f"Unknown engine: {name}")


class ContextAgents:
    """Wires store, resolver and engine together for the three entrypoints.

    The inspection methods never touch the engine, so it may be None there.
    """

    def __init__(self, config: CCAConfig, engine: Engine | None) -> None:
        self.config = config
        self.engine = engine
        self.store = KnowledgeStore(config.memory_dir)
        self.resolver = ProjectResolver(self.store)

    # ── init ──────────────────────────────────────────────────

    async def init_project(self, project_path: str | Path) -> InitResult:
        """Explore a codebase, then write its context tree."""
        logger.info("Initializing project: %s", project_path)
        codebase = Path(project_path).expanduser()
        if not codebase.exists():
            exc = PathNotFound(f"Project path does not exist: {project_path}")
            logger.error("%s", exc)
            return InitResult(
                success=False, project_name="", memory_path="", error=str(exc), error_kind=exc.kind
            )

        codebase = codebase.resolve()
        project = codebase.name
        memory_path = ""
        limits = self.config.limits

        try:
            memory_path = self.store.project_path(project)
            await run_explorer(self.engine, self.store, project, codebase, limits.explorer)
            if not self.store.exploration_path(project).is_file():
                raise ExplorationIncomplete("Explorer agent did not create EXPLORATION.md")
            await run_writer(self.engine, self.store, project, limits.writer)
        except Exception as e:
            logger.error("Project initialization failed: %s", e)
            return InitResult(
                success=False,
                project_name=project,
                memory_path=str(memory_path),
                error=str(e),
                error_kind=_kind(e),
            )

        logger.info("Project %s initialized at %s", project, memory_path)
        return InitResult(success=True, project_name=project, memory_path=str(memory_path))

    # ── search ────────────────────────────────────────────────

    async def search_context(
        self,
        query: str,
        project_name: str | None = None,
        project_path: str | None = None,
        cwd: str | Path | None = None,
    ) -> SearchResult:
        """Answer a query from a project's context tree."""
        logger.info("Searching context (project=%s): %s", project_name, query)
        project = ""
        try:
            if not query or not query.strip():
                raise EmptyInput("Query cannot be empty")
            project = self.resolver.resolve(project_name, project_path, cwd)
            self._require_context(project)
            result = await run_searcher(
                self.engine, self.store, project, query, self.config.limits.searcher
            )
        except Exception as e:
            logger.error("Search failed: %s", e)
            return SearchResult(
                success=False, project_name=project, query=query, error=str(e), error_kind=_kind(e)
            )
        return SearchResult(success=True, project_name=project, query=query, result=result)

    # ── update ────────────────────────────────────────────────

    async def update_context(
        self,
        context: str,
        project_name: str | None = None,
        project_path: str | None = None,
        cwd: str | Path | None = None,
    ) -> UpdateResult:
        """Fold a description of a change into a project's context tree."""
        logger.info("Updating context (project=%s, %d chars)", project_name, len(context or ""))
        project = ""
        try:
            if not context or not context.strip():
                raise EmptyInput("Context cannot be empty")
            resolved = self.resolver.resolve_codebase(project_name, project_path, cwd)
            project = resolved.name
            self._require_context(project)
            logger.debug("Codebase for %s: %s", project, resolved.codebase_path)
            result = await run_updater(
                self.engine,
                self.store,
                project,
                resolved.codebase_path,
                context,
                self.config.limits.updater,
            )
        except Exception as e:
            logger.error("Update failed: %s", e)
            return UpdateResult(
                success=False,
                project_name=project,
                context=context,
                error=str(e),
                error_kind=_kind(e),
            )
        return UpdateResult(success=True, project_name=project, context=context, result=result)

    # ── Inspection ────────────────────────────────────────────

    def list_projects(self) -> list[str]:
        return self.store.list_projects()

    def show_project(self, project: str) -> ProjectStructure | None:
        return self.store.list_project_structure(project)

    def _require_context(self, project: str) -> None:
        if not self.store.project_exists(project):
            raise ProjectContextMissing(
                f'No context exists for project "{project}". Use init_project first.'
            )
