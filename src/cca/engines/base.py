"""Engine protocol and shared types."""

from __future__ import annotations

import inspect
import re
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

_JSON_TYPES = {str: "string", int: "integer", float: "number", bool: "boolean"}
_ARG_LINE = re.compile(r"^\s{2,}(\w+)(?:\s*\([^)]*\))?:\s*(.*)$")


@dataclass
class ToolDefinition:
    """A tool the reasoning process can call. ``parameters`` is a JSON schema."""

    name: str
    description: str
    parameters: dict[str, Any]
    handler: Callable[..., str]


@dataclass
class AgentResponse:
    """Final answer of one agent run."""

    text: str
    model: str | None = None
    steps: int = 0
    input_tokens: int | None = None
    output_tokens: int | None = None
    tool_calls: list[dict] = field(default_factory=list)


@runtime_checkable
class Engine(Protocol):
    """Protocol that all engine backends must implement."""

    @property
    def name(self) -> str: ...

    async def run(
        self,
        message: str,
        *,
        system_prompt: str,
        tools: list[ToolDefinition],
        max_steps: int,
    ) -> AgentResponse:
        """Drive a tool-using conversation until the model stops calling tools."""
        ...

    async def health_check(self) -> bool:
        """Check if the engine is available. Returns True if healthy."""
        ...


# ── Callable → ToolDefinition ─────────────────────────────────


def _json_type(annotation: Any) -> str:
    """Map a Python annotation to a JSON schema type, unwrapping Optional."""
    if isinstance(annotation, types.UnionType) or typing.get_origin(annotation) is typing.Union:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        annotation = args[0] if args else str
    return _JSON_TYPES.get(annotation, "string")


def _parse_docstring(doc: str) -> tuple[str, dict[str, str]]:
    """Split a Google-style docstring into (description, {arg: help})."""
    description: list[str] = []
    arg_help: dict[str, str] = {}
    in_args = False
    current: str | None = None
    for line in doc.splitlines():
        stripped = line.strip()
        if stripped == "Args:":
            in_args = True
            continue
        if not in_args:
            description.append(stripped)
            continue
        if stripped and not line[0].isspace():
            break  # next section (Returns:, Raises:, ...)
        match = _ARG_LINE.match(line)
        if match:
            current = match.group(1)
            arg_help[current] = match.group(2).strip()
        elif stripped and current:
            arg_help[current] += " " + stripped
        elif not stripped:
            current = None
    return " ".join(" ".join(description).split()), arg_help


def tool_from_callable(handler: Callable[..., str], name: str | None = None) -> ToolDefinition:
    """Build a ToolDefinition from a function's signature and docstring.

    Parameters without a default are required.
    """
    name = name or handler.__name__
    description, arg_help = _parse_docstring(inspect.getdoc(handler) or f"Tool: {name}")
    hints = typing.get_type_hints(handler)

    properties: dict[str, Any] = {}
    required: list[str] = []
    for param_name, param in inspect.signature(handler).parameters.items():
        prop: dict[str, Any] = {"type": _json_type(hints.get(param_name, str))}
        if param_name in arg_help:
            prop["description"] = arg_help[param_name]
        if param.default is inspect.Parameter.empty:
            required.append(param_name)
        elif param.default is not None:
            prop["default"] = param.default
        properties[param_name] = prop

    return ToolDefinition(
        name=name,
        description=description,
        parameters={"type": "object", "properties": properties, "required": required},
        handler=handler,
    )


def tools_from_callables(*handlers: Callable[..., str]) -> list[ToolDefinition]:
    return [tool_from_callable(h) for h in handlers]
