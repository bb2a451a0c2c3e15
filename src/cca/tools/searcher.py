"""Searcher tools — read-only view of a project's context tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cca.engines.base import ToolDefinition, tools_from_callables
from cca.errors import KnowledgeError
from cca.tools.common import error, render_context_tree

if TYPE_CHECKING:
    from cca.memory.store import KnowledgeStore


def read_topic_tool(store: KnowledgeStore, project: str):
    def read_topic(domain: str, topic: str) -> str:
        """Read the content of a specific topic file.

        Args:
            domain: Domain name (folder name).
            topic: Topic name without the .md extension.
        """
        try:
            content = store.read_topic(project, domain, topic)
        except KnowledgeError as e:
            return error(e)
        if content is None:
            return error(f"{domain}/{topic}.md does not exist.")
        return content

    return read_topic


def list_context_tree_tool(store: KnowledgeStore, project: str):
    def list_context_tree() -> str:
        """List every domain and its topics. Call this first to see what knowledge exists."""
        return render_context_tree(store, project)

    return list_context_tree


def get_searcher_tools(store: KnowledgeStore, project: str) -> list[ToolDefinition]:
    return tools_from_callables(
        list_context_tree_tool(store, project),
        read_topic_tool(store, project),
    )
