"""MCP server exposing init, search and update over stdio.

Each tool call drives one ``ContextAgents`` entrypoint and renders its
result as text. Failures come back as text starting with ``Failed to``.
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from cca.core import ContextAgents

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = """\
Context-capturing agents keep a persistent, per-project knowledge tree
(domains of markdown topics) under ~/.context-capturing-agents.

- init_project: explore a codebase once and build its context tree.
- search_context: answer a question from an existing context tree.
- update_context: fold a description of a change into the tree.

search_context and update_context infer the project from the working
directory when project_name and project_path are omitted.
"""


def create_server(agents: ContextAgents) -> FastMCP:
    """Create the MCP server with the three entrypoint tools registered.

    Args:
        agents: Configured entrypoints, engine already injected.

    Returns:
        FastMCP server instance.
    """
    mcp = FastMCP("context-capturing-agents", instructions=SERVER_INSTRUCTIONS)

    @mcp.tool()
    async def init_project(project_path: str) -> str:
        """Initialize context for a project by exploring its codebase.

        Runs an explorer agent over the codebase, then a writer agent that
        organizes the findings into a context tree. This can take a while.

        Args:
            project_path: Absolute path to the project directory.
        """
        result = await agents.init_project(project_path)
        if not result.success:
            return f"Failed to initialize project: {result.error}"
        return (
            f'Successfully initialized context for project "{result.project_name}".\n'
            f"Context stored at: {result.memory_path}"
        )

    @mcp.tool()
    async def search_context(
        query: str, project_name: str | None = None, project_path: str | None = None
    ) -> str:
        """Search a project's context tree and answer with references.

        Args:
            query: What to look for, e.g. "how does authentication work?"
            project_name: Project name. Inferred from the working directory if omitted.
            project_path: Project directory. Its basename is used as the project name.
        """
        result = await agents.search_context(query, project_name, project_path)
        if not result.success:
            return f"Failed to search context: {result.error}"
        return result.result

    @mcp.tool()
    async def update_context(
        context: str, project_name: str | None = None, project_path: str | None = None
    ) -> str:
        """Update a project's context tree with new information about a change.

        Args:
            context: Description of what changed, e.g. "added JWT refresh tokens".
            project_name: Project name. Inferred from the working directory if omitted.
            project_path: Project directory. Its basename is used as the project name.
        """
        result = await agents.update_context(context, project_name, project_path)
        if not result.success:
            return f"Failed to update context: {result.error}"
        return result.result

    return mcp


def run_server(agents: ContextAgents, transport: str = "stdio") -> None:
    """Run the MCP server. Blocks until the client disconnects."""
    mcp = create_server(agents)
    logger.info("Starting MCP server (%s)", transport)
    mcp.run(transport=transport)
