"""Anthropic API engine — tool-use loop over the Messages API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import anthropic

from cca.engines.base import AgentResponse, ToolDefinition
from cca.errors import AgentError, StepLimitExceeded

logger = logging.getLogger(__name__)


@dataclass
class AnthropicAgentEngine:
    """Runs one agent conversation via the `anthropic` SDK.

    Each model turn counts as one step. The loop ends when the model answers
    without requesting a tool, or raises StepLimitExceeded.
    """

    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 8192
    temperature: float = 0.0
    timeout: int = 300
    client: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = anthropic.Anthropic(timeout=self.timeout)

    @property
    def name(self) -> str:
        return "anthropic_api"

    async def run(
        self,
        message: str,
        *,
        system_prompt: str,
        tools: list[ToolDefinition],
        max_steps: int,
    ) -> AgentResponse:
        by_name = {t.name: t for t in tools}
        tool_params = [
            {"name": t.name, "description": t.description, "input_schema": t.parameters}
            for t in tools
        ]
        messages: list[dict] = [{"role": "user", "content": message}]
        tool_calls: list[dict] = []
        input_tokens = output_tokens = 0

        for step in range(1, max_steps + 1):
            kwargs: dict = {
                "model": self.model,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
                "system": system_prompt,
                "messages": messages,
            }
            if tool_params:
                kwargs["tools"] = tool_params

            try:
                response = await asyncio.to_thread(self.client.messages.create, **kwargs)
            except Exception as e:
                logger.error("Anthropic API error: %s", e)
                raise AgentError(f"Anthropic API error: {e}") from e

            if response.usage:
                input_tokens += response.usage.input_tokens
                output_tokens += response.usage.output_tokens

            messages.append({"role": "assistant", "content": response.content})

            if response.stop_reason != "tool_use":
                text = "\n".join(b.text for b in response.content if b.type == "text")
                logger.debug("Agent finished after %d steps", step)
                return AgentResponse(
                    text=text,
                    model=response.model,
                    steps=step,
                    input_tokens=input_tokens,
                    output_tokens=output_tokens,
                    tool_calls=tool_calls,
                )

            results = []
            for block in response.content:
                if block.type != "tool_use":
                    continue
                tool_calls.append({"id": block.id, "name": block.name, "input": block.input})
                results.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": block.id,
                        "content": await self._handle_tool_call(by_name, block.name, block.input),
                    }
                )
            messages.append({"role": "user", "content": results})

        raise StepLimitExceeded(f"Agent did not finish within {max_steps} steps")

    async def _handle_tool_call(
        self, tools: dict[str, ToolDefinition], tool_name: str, tool_input: dict
    ) -> str:
        """Execute a tool. Failures become text the model can read."""
        tool_def = tools.get(tool_name)
        if not tool_def:
            logger.warning("Unknown tool requested: %s", tool_name)
            return f"Error: Unknown tool: {tool_name}"

        logger.debug("Tool call: %s %s", tool_name, list(tool_input))
        try:
            result = tool_def.handler(**tool_input)
            if asyncio.iscoroutine(result):
                result = await result
            return str(result)
        except Exception as e:
            logger.error("Tool %s failed: %s", tool_name, e)
            return f"Error: Tool {tool_name} failed: {e}"

    async def health_check(self) -> bool:
        try:
            response = await asyncio.to_thread(
                self.client.messages.create,
                model=self.model,
                max_tokens=10,
                messages=[{"role": "user", "content": "ping"}],
            )
            return bool(response.content)
        except Exception:
            return False
