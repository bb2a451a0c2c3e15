"""Error taxonomy.

Every failure in the store, the source sandbox and the entrypoints is one of
these classes. ``kind`` is the stable tag that ends up in result objects.
"""

from __future__ import annotations


class CCAError(Exception):
    """Base class for all context-capturing-agents errors."""

    kind = "Error"


# ── Entrypoint / resolution ───────────────────────────────────


class PathNotFound(CCAError):
    kind = "PathNotFound"


class ExplorationIncomplete(CCAError):
    kind = "ExplorationIncomplete"


class EmptyInput(CCAError):
    kind = "EmptyInput"


class ProjectUnresolvable(CCAError):
    kind = "ProjectUnresolvable"


class ProjectAmbiguous(ProjectUnresolvable):
    """More than one project exists and nothing singles one out."""

    kind = "ProjectAmbiguous"

    def __init__(self, message: str, candidates: list[str]) -> None:
        super().__init__(message)
        self.candidates = candidates


class ProjectContextMissing(CCAError):
    kind = "ProjectContextMissing"


# ── Knowledge store ───────────────────────────────────────────


class KnowledgeError(CCAError):
    """Precondition violation in the knowledge store."""


class InvalidName(KnowledgeError):
    kind = "InvalidName"


class DomainNotFound(KnowledgeError):
    kind = "DomainNotFound"


class DomainAlreadyExists(KnowledgeError):
    kind = "DomainAlreadyExists"


class TopicNotFound(KnowledgeError):
    kind = "TopicNotFound"


class TopicAlreadyExists(KnowledgeError):
    kind = "TopicAlreadyExists"


# ── Source sandbox ────────────────────────────────────────────


class SourceError(CCAError):
    """Failure reading the analyzed codebase."""


class OutOfBounds(SourceError):
    kind = "OutOfBounds"


class SourceNotFound(SourceError):
    kind = "SourceNotFound"


class FileTooLarge(SourceError):
    kind = "FileTooLarge"


# ── Reasoning process ─────────────────────────────────────────


class AgentError(CCAError):
    kind = "AgentError"


class StepLimitExceeded(AgentError):
    kind = "StepLimitExceeded"
