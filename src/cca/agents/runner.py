"""Agent runs — bind a tool surface to a project and hand it to the engine."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from cca.agents import prompts
from cca.tools.explorer import get_explorer_tools
from cca.tools.searcher import get_searcher_tools
from cca.tools.updater import get_updater_tools
from cca.tools.writer import get_writer_tools

if TYPE_CHECKING:
    from cca.engines.base import AgentResponse, Engine, ToolDefinition
    from cca.memory.store import KnowledgeStore

logger = logging.getLogger(__name__)

NO_ANSWER = "No response generated from {agent} agent."


async def _run(
    agent: str,
    engine: Engine,
    message: str,
    system_prompt: str,
    tools: list[ToolDefinition],
    max_steps: int,
) -> AgentResponse:
    logger.info("Running %s agent (%d tools, max %d steps)", agent, len(tools), max_steps)
    start = time.monotonic()
    response = await engine.run(
        message, system_prompt=system_prompt, tools=tools, max_steps=max_steps
    )
    logger.info(
        "%s agent finished: %d steps, %d tool calls, %.1fs",
        agent.capitalize(),
        response.steps,
        len(response.tool_calls),
        time.monotonic() - start,
    )
    return response


async def run_explorer(
    engine: Engine, store: KnowledgeStore, project: str, codebase: Path, max_steps: int
) -> AgentResponse:
    return await _run(
        "explorer",
        engine,
        prompts.EXPLORER_KICKOFF,
        prompts.EXPLORER_SYSTEM_PROMPT,
        get_explorer_tools(store, project, codebase),
        max_steps,
    )


async def run_writer(
    engine: Engine, store: KnowledgeStore, project: str, max_steps: int
) -> AgentResponse:
    return await _run(
        "writer",
        engine,
        prompts.WRITER_KICKOFF,
        prompts.WRITER_SYSTEM_PROMPT,
        get_writer_tools(store, project),
        max_steps,
    )


async def run_searcher(
    engine: Engine, store: KnowledgeStore, project: str, query: str, max_steps: int
) -> str:
    response = await _run(
        "searcher",
        engine,
        prompts.searcher_kickoff(query),
        prompts.SEARCHER_SYSTEM_PROMPT,
        get_searcher_tools(store, project),
        max_steps,
    )
    return response.text or NO_ANSWER.format(agent="search")


async def run_updater(
    engine: Engine,
    store: KnowledgeStore,
    project: str,
    codebase: Path,
    context: str,
    max_steps: int,
) -> str:
    response = await _run(
        "updater",
        engine,
        prompts.updater_kickoff(context),
        prompts.UPDATER_SYSTEM_PROMPT,
        get_updater_tools(store, project, codebase),
        max_steps,
    )
    return response.text or NO_ANSWER.format(agent="update")
