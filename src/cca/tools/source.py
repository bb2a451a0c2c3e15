"""Read-only, sandboxed access to the analyzed codebase."""

from __future__ import annotations

import fnmatch
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter

from cca.errors import FileTooLarge, OutOfBounds, SourceNotFound

logger = logging.getLogger(__name__)

IGNORE_PATTERNS = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "__pycache__",
    ".venv",
    "venv",
    ".idea",
    ".vscode",
    "*.log",
    ".DS_Store",
    "coverage",
    ".nyc_output",
)

MAX_SOURCE_BYTES = 100 * 1024

# Files other coding assistants keep their project instructions in.
AGENT_CONTEXT_FILES = (
    "CLAUDE.md",
    "AGENTS.md",
    "agents.md",
    ".cursorrules",
    ".windsurfrules",
    ".github/copilot-instructions.md",
)
AGENT_RULE_DIRS = (".cursor/rules",)


def should_ignore(name: str) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in IGNORE_PATTERNS)


@dataclass
class TreeNode:
    name: str
    is_dir: bool
    children: list[TreeNode] = field(default_factory=list)


@dataclass
class SearchHit:
    path: str
    lines: list[tuple[int, str]]


class SourceTree:
    """All paths resolve against ``root`` and must stay inside it."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def resolve(self, rel_path: str = ".") -> Path:
        candidate = Path(rel_path)
        if not candidate.is_absolute():
            candidate = self.root / candidate
        candidate = candidate.resolve()
        if candidate != self.root and not candidate.is_relative_to(self.root):
            logger.warning("Path outside project rejected: %s", rel_path)
            raise OutOfBounds(f"Cannot access {rel_path}: outside the project directory.")
        return candidate

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    # ── Reading ───────────────────────────────────────────────

    def read_file(self, rel_path: str, max_bytes: int | None = None) -> str:
        """Read a UTF-8 file. Undecodable bytes are replaced."""
        path = self.resolve(rel_path)
        if not path.exists():
            raise SourceNotFound(f'File "{rel_path}" does not exist.')
        if path.is_dir():
            raise SourceNotFound(f'"{rel_path}" is a directory, not a file.')
        size = path.stat().st_size
        if max_bytes is not None and size > max_bytes:
            raise FileTooLarge(
                f'File "{rel_path}" is too large ({round(size / 1024)}KB). '
                f"Maximum size is {max_bytes // 1024}KB."
            )
        return path.read_text(encoding="utf-8", errors="replace")

    # ── Listing ───────────────────────────────────────────────

    def list_dir(self, rel_path: str = ".", skip_hidden: bool = False) -> list[tuple[str, bool]]:
        """Immediate children as (name, is_dir), ignore set applied."""
        path = self.resolve(rel_path)
        if not path.is_dir():
            raise SourceNotFound(f'Directory "{rel_path}" does not exist.')
        entries = []
        for entry in sorted(path.iterdir(), key=lambda p: p.name):
            if should_ignore(entry.name) or (skip_hidden and entry.name.startswith(".")):
                continue
            entries.append((entry.name, entry.is_dir()))
        return entries

    def tree(self, rel_path: str = ".", max_depth: int = 3) -> list[TreeNode]:
        path = self.resolve(rel_path)
        if not path.is_dir():
            raise SourceNotFound(f'Directory "{rel_path}" does not exist.')
        return self._tree(path, max_depth, 0)

    def _tree(self, path: Path, max_depth: int, depth: int) -> list[TreeNode]:
        if depth >= max_depth:
            return []
        nodes = []
        for entry in sorted(path.iterdir(), key=lambda p: p.name):
            if should_ignore(entry.name):
                continue
            node = TreeNode(name=entry.name, is_dir=entry.is_dir())
            if node.is_dir:
                node.children = self._tree(entry, max_depth, depth + 1)
            nodes.append(node)
        return nodes

    def iter_files(self, pattern: str = "**/*") -> list[Path]:
        """Files matching a glob, skipping anything under an ignored directory.

        The pattern is relative to the root; matches that resolve outside it
        (through symlinks) are dropped.
        """
        pattern = pattern or "**/*"
        if Path(pattern).is_absolute() or ".." in Path(pattern).parts:
            logger.warning("File pattern outside project rejected: %s", pattern)
            raise OutOfBounds(f"Cannot search {pattern}: outside the project directory.")
        files = []
        for path in sorted(self.root.glob(pattern)):
            if not path.is_file() or not path.resolve().is_relative_to(self.root):
                continue
            parts = path.relative_to(self.root).parts
            if any(should_ignore(part) for part in parts):
                continue
            files.append(path)
        return files

    # ── Search ────────────────────────────────────────────────

    def search(
        self,
        pattern: str,
        file_pattern: str = "**/*",
        max_files: int = 50,
        max_lines: int = 5,
    ) -> list[SearchHit]:
        """Case-insensitive regex search over the first ``max_files`` files.

        Raises re.error for an invalid pattern and OutOfBounds for a file
        pattern that leaves the root.
        """
        regex = re.compile(pattern, re.IGNORECASE)
        hits = []
        for path in self.iter_files(file_pattern)[:max_files]:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            lines = [
                (lineno, line.strip())
                for lineno, line in enumerate(text.splitlines(), start=1)
                if regex.search(line)
            ]
            if lines:
                hits.append(SearchHit(path=self.relative(path), lines=lines[:max_lines]))
        return hits

    # ── Existing agent context ────────────────────────────────

    def agent_context(self) -> list[tuple[str, str]]:
        """(relative path, rendered text) for every agent instruction file found.

        Cursor ``.mdc`` rules carry YAML frontmatter; it is rendered as a
        short header above the rule body.
        """
        found: list[tuple[str, str]] = []
        for name in AGENT_CONTEXT_FILES:
            path = self.root / name
            if path.is_file():
                found.append((name, path.read_text(encoding="utf-8", errors="replace")))

        for rule_dir in AGENT_RULE_DIRS:
            directory = self.root / rule_dir
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*")):
                if path.suffix not in (".mdc", ".md") or not path.is_file():
                    continue
                found.append((self.relative(path), _render_rule(path)))
        return found


def _render_rule(path: Path) -> str:
    try:
        post = frontmatter.load(str(path))
    except Exception:
        return path.read_text(encoding="utf-8", errors="replace")
    header = []
    for key in ("description", "globs", "alwaysApply"):
        value = post.metadata.get(key)
        if value not in (None, ""):
            header.append(f"- {key}: {value}")
    body = post.content.strip()
    return "\n".join(header) + ("\n\n" if header else "") + body
