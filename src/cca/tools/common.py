"""Helpers shared by the tool surfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cca.memory.store import KnowledgeStore
    from cca.tools.source import TreeNode


def error(exc: Exception | str) -> str:
    """Tool results are plain text; failures start with ``Error:``."""
    return f"Error: {exc}"


def render_context_tree(store: KnowledgeStore, project: str) -> str:
    """Domains that have at least one topic, with their topics."""
    structure = store.list_project_structure(project)
    if structure is None:
        return "No context tree exists for this project."

    lines: list[str] = []
    for domain in structure.domains:
        if not domain.topics:
            continue
        lines.append(f"{domain.name}/")
        lines.extend(f"  ├── {topic}.md" for topic in domain.topics)

    if not lines:
        return "Context tree is empty. No domains or topics found."
    return "\n".join(lines)


def render_source_tree(nodes: list[TreeNode], indent: str = "") -> str:
    out = ""
    for node in nodes:
        out += f"{indent}{node.name}{'/' if node.is_dir else ''}\n"
        if node.children:
            out += render_source_tree(node.children, indent + "  ")
    return out
