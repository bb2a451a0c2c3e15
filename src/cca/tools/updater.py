"""Updater tools — incremental, strict maintenance of the context tree.

Unlike the writer surface, nothing here creates structure implicitly:
``create_topic`` needs an existing domain and ``create_domain`` refuses to
reuse one. The updater can also read the codebase to verify a change.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from cca.engines.base import ToolDefinition, tools_from_callables
from cca.errors import KnowledgeError, SourceError, TopicAlreadyExists, TopicNotFound
from cca.tools.common import error
from cca.tools.searcher import list_context_tree_tool, read_topic_tool
from cca.tools.source import MAX_SOURCE_BYTES, SourceTree

if TYPE_CHECKING:
    from cca.memory.store import KnowledgeStore


def get_updater_tools(store: KnowledgeStore, project: str, codebase: Path) -> list[ToolDefinition]:
    source = SourceTree(codebase)

    def update_topic(domain: str, topic: str, content: str, append_mode: bool = False) -> str:
        """Update an existing topic, replacing its content or appending to it.

        Args:
            domain: Domain name (folder name).
            topic: Topic name without the .md extension.
            content: New content to write or append.
            append_mode: Append to the existing content instead of replacing it.
        """
        try:
            store.update_topic(project, domain, topic, content, append=append_mode)
        except TopicNotFound as e:
            return error(f"{e} Use create_topic instead.")
        except KnowledgeError as e:
            return error(e)
        if append_mode:
            return f"Successfully appended to {domain}/{topic}.md"
        return f"Successfully updated {domain}/{topic}.md"

    def create_topic(domain: str, topic: str, content: str) -> str:
        """Create a new topic in an existing domain.

        Args:
            domain: Domain name (folder name), must already exist.
            topic: Topic name without the .md extension, must not exist yet.
            content: Content for the new topic.
        """
        try:
            store.create_topic(project, domain, topic, content)
        except TopicAlreadyExists as e:
            return error(f"{e} Use update_topic instead.")
        except KnowledgeError as e:
            return error(f"{e} Use create_domain first or specify an existing domain.")
        return f"Successfully created {domain}/{topic}.md"

    def create_domain(domain: str, initial_topic: str = "", initial_content: str = "") -> str:
        """Create a new domain for a genuinely new area. Can also create its first topic.

        Args:
            domain: Domain name in PascalCase, e.g. Infrastructure.
            initial_topic: Optional name of a first topic, without extension.
            initial_content: Content for the first topic, required with initial_topic.
        """
        try:
            store.create_domain(project, domain, exist_ok=False)
            if initial_topic and initial_content:
                store.create_topic(project, domain, initial_topic, initial_content)
                return (
                    f'Successfully created domain "{domain}" '
                    f"with initial topic {initial_topic}.md"
                )
        except KnowledgeError as e:
            return error(f"{e} Use create_topic to add topics to it.")
        return f'Successfully created domain "{domain}"'

    def delete_topic(domain: str, topic: str) -> str:
        """Delete a topic that is obsolete or no longer accurate.

        Args:
            domain: Domain name (folder name).
            topic: Topic name without the .md extension.
        """
        try:
            deleted = store.delete_topic(project, domain, topic)
        except KnowledgeError as e:
            return error(e)
        if not deleted:
            return error(f"{domain}/{topic}.md does not exist.")
        return f"Successfully deleted {domain}/{topic}.md"

    def delete_domain(domain: str) -> str:
        """Delete an entire domain and all its topics. Prefer deleting topics first.

        Args:
            domain: Domain name (folder name) to delete.
        """
        try:
            count = len(store.read_domain(project, domain))
            deleted = store.delete_domain(project, domain)
        except KnowledgeError as e:
            return error(e)
        if not deleted:
            return error(f'Domain "{domain}" does not exist.')
        return f'Successfully deleted domain "{domain}" ({count} topic(s) removed)'

    def read_source_file(file_path: str) -> str:
        """Read a file from the project codebase to verify a change.

        Args:
            file_path: Path relative to the project root, e.g. src/auth/middleware.py
        """
        try:
            return source.read_file(file_path, max_bytes=MAX_SOURCE_BYTES)
        except SourceError as e:
            return error(e)

    def list_source_directory(dir_path: str = "") -> str:
        """List files and subdirectories of a project directory.

        Args:
            dir_path: Directory relative to the project root. Empty for the root.
        """
        try:
            entries = source.list_dir(dir_path or ".", skip_hidden=True)
        except SourceError as e:
            return error(e)
        if not entries:
            return "Directory is empty."
        return "\n".join(f"{name}/" if is_dir else name for name, is_dir in entries)

    return tools_from_callables(
        list_context_tree_tool(store, project),
        read_topic_tool(store, project),
        update_topic,
        create_topic,
        create_domain,
        delete_topic,
        delete_domain,
        read_source_file,
        list_source_directory,
    )
