"""Writer tools — turn EXPLORATION.md into the domain/topic tree.

This surface is permissive: ``write_context`` creates missing domains and
overwrites existing topics. It is meant for the initial bulk authoring pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cca.engines.base import ToolDefinition, tools_from_callables
from cca.errors import KnowledgeError, TopicNotFound
from cca.tools.common import error

if TYPE_CHECKING:
    from cca.memory.store import KnowledgeStore


def get_writer_tools(store: KnowledgeStore, project: str) -> list[ToolDefinition]:
    exploration = store.exploration_path(project)

    def read_exploration() -> str:
        """Read the EXPLORATION.md file created by the explorer agent."""
        if not exploration.is_file():
            return error("EXPLORATION.md does not exist. Explorer agent must run first.")
        return exploration.read_text(encoding="utf-8")

    def write_context(domain: str, topic: str, content: str) -> str:
        """Write a topic file. Creates the domain folder if needed.

        Args:
            domain: Domain name, e.g. Architecture, API, Frontend.
            topic: Topic name without extension, e.g. authentication.
            content: Markdown content for the topic.
        """
        try:
            store.write(project, domain, topic, content)
        except KnowledgeError as e:
            return error(e)
        return f"Context written: {domain}/{topic}.md"

    def update_context(domain: str, topic: str, content: str) -> str:
        """Replace the content of an existing topic file.

        Args:
            domain: Domain name.
            topic: Topic name without extension.
            content: Updated markdown content.
        """
        try:
            store.update_topic(project, domain, topic, content)
        except TopicNotFound as e:
            return error(f"{e} Use write_context to create it.")
        except KnowledgeError as e:
            return error(e)
        return f"Context updated: {domain}/{topic}.md"

    def list_context() -> str:
        """List the current context tree (domains and topics)."""
        structure = store.list_project_structure(project)
        if structure is None:
            return "No context tree exists yet."
        lines = []
        for domain in structure.domains:
            lines.append(f"{domain.name}/")
            lines.extend(f"   {topic}.md" for topic in domain.topics)
        project_dir = store.project_path(project)
        lines.extend(p.name for p in sorted(project_dir.glob("*.md")))
        return "\n".join(lines) if lines else "Context tree is empty."

    def read_context(domain: str, topic: str) -> str:
        """Read a specific topic file.

        Args:
            domain: Domain name.
            topic: Topic name without extension.
        """
        try:
            content = store.read_topic(project, domain, topic)
        except KnowledgeError as e:
            return error(e)
        if content is None:
            return error(f"{domain}/{topic}.md does not exist.")
        return content

    return tools_from_callables(
        read_exploration,
        write_context,
        update_context,
        list_context,
        read_context,
    )
