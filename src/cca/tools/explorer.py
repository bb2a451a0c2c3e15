"""Explorer tools — read the codebase, write EXPLORATION.md.

The explorer is the first agent of ``init``. It only reads the codebase and
only writes the single exploration document for the project.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from cca.engines.base import ToolDefinition, tools_from_callables
from cca.errors import SourceError
from cca.tools.common import error, render_source_tree
from cca.tools.source import SourceTree

if TYPE_CHECKING:
    from cca.memory.store import KnowledgeStore

logger = logging.getLogger(__name__)

MAX_READ_CHARS = 10_000


def get_explorer_tools(store: KnowledgeStore, project: str, codebase: Path) -> list[ToolDefinition]:
    source = SourceTree(codebase)
    exploration = store.exploration_path(project)

    def read_agent_context() -> str:
        """Find existing AI agent documentation in the project.

        Looks for CLAUDE.md, AGENTS.md, .cursorrules, .cursor/rules,
        copilot instructions and similar files. Call this first.
        """
        found = source.agent_context()
        logger.debug("read_agent_context found %d files", len(found))
        if not found:
            return "No existing AI agent context files found."
        return "\n\n".join(f"## {path}\n\n{text.strip()}" for path, text in found)

    def read_file(file_path: str) -> str:
        """Read the contents of a file in the project.

        Args:
            file_path: Path to the file, relative to the project root.
        """
        try:
            content = source.read_file(file_path)
        except SourceError as e:
            return error(e)
        if len(content) > MAX_READ_CHARS:
            return content[:MAX_READ_CHARS] + "\n\n... [truncated]"
        return content

    def list_directory(dir_path: str = ".", recursive: bool = False, max_depth: int = 3) -> str:
        """List files and directories. Use recursive=true to see nested structure.

        Args:
            dir_path: Directory to list, relative to the project root.
            recursive: Whether to list nested directories.
            max_depth: How deep a recursive listing goes.
        """
        try:
            if recursive:
                return render_source_tree(source.tree(dir_path, max_depth)) or "Directory is empty."
            entries = source.list_dir(dir_path)
        except SourceError as e:
            return error(e)
        return "\n".join(f"{name}/" if is_dir else name for name, is_dir in entries)

    def search_files(pattern: str, file_pattern: str = "**/*") -> str:
        """Search for a regex across project files.

        Returns matching lines with file paths and line numbers.

        Args:
            pattern: Regular expression, matched case-insensitively.
            file_pattern: Glob that selects which files to search, e.g. **/*.py
        """
        try:
            hits = source.search(pattern, file_pattern)
        except re.error as e:
            return error(f"Invalid pattern: {e}")
        except SourceError as e:
            return error(e)
        logger.debug("search_files %r matched %d files", pattern, len(hits))
        if not hits:
            return "No matches found"
        return "\n\n".join(
            hit.path + ":\n" + "\n".join(f"  {n}: {line}" for n, line in hit.lines)
            for hit in hits[:20]
        )

    def write_exploration(content: str) -> str:
        """Write your findings to EXPLORATION.md, replacing any previous version.

        Args:
            content: Complete markdown content of the exploration.
        """
        store.init_project(project)
        exploration.write_text(content, encoding="utf-8")
        logger.info("Exploration written: %s (%d chars)", exploration, len(content))
        return f"Exploration saved to: {exploration}"

    def update_exploration(content: str) -> str:
        """Replace EXPLORATION.md with refined content. The file must already exist.

        Args:
            content: Updated markdown content.
        """
        if not exploration.is_file():
            return error("EXPLORATION.md does not exist. Use write_exploration to create it first.")
        exploration.write_text(content, encoding="utf-8")
        logger.info("Exploration updated: %s", exploration)
        return f"Exploration updated: {exploration}"

    return tools_from_callables(
        read_agent_context,
        read_file,
        list_directory,
        search_files,
        write_exploration,
        update_exploration,
    )
