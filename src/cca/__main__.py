"""Entry point: cca <command> (or python -m cca <command>)

- init [PATH]:         Explore a codebase and build its context tree
- search QUERY:        Answer a question from a context tree
- update CONTEXT:      Fold a change description into a context tree
- projects:            List initialized projects
- show PROJECT:        Print a project's domains and topics
- serve:               MCP server over stdio
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from cca.config import load_config


def _setup_logging(level: str) -> None:
    # stdout belongs to the MCP transport and to command output
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cca", description="Context-capturing agents for codebases."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="explore a codebase and build its context tree")
    init.add_argument("path", nargs="?", default=".", help="project directory (default: .)")

    search = sub.add_parser("search", help="answer a question from a context tree")
    search.add_argument("query")
    search.add_argument("--project", help="project name")
    search.add_argument("--path", help="project directory")

    update = sub.add_parser("update", help="fold a change into a context tree")
    update.add_argument("context")
    update.add_argument("--project", help="project name")
    update.add_argument("--path", help="project directory")

    sub.add_parser("projects", help="list initialized projects")

    show = sub.add_parser("show", help="print a project's domains and topics")
    show.add_argument("project")

    sub.add_parser("serve", help="run the MCP server over stdio")
    return parser


def _build_agents(config, with_engine: bool = True):
    from cca.core import ContextAgents, build_engine

    return ContextAgents(config, build_engine(config) if with_engine else None)


def _run_init(args: argparse.Namespace, config) -> int:
    agents = _build_agents(config)
    print(f"Initializing context for {args.path} ... this may take a few minutes.")
    result = asyncio.run(agents.init_project(args.path))
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    print(f'Context for "{result.project_name}" saved to {result.memory_path}')
    return 0


def _run_search(args: argparse.Namespace, config) -> int:
    agents = _build_agents(config)
    result = asyncio.run(agents.search_context(args.query, args.project, args.path))
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    print(result.result)
    return 0


def _run_update(args: argparse.Namespace, config) -> int:
    agents = _build_agents(config)
    result = asyncio.run(agents.update_context(args.context, args.project, args.path))
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    print(result.result)
    return 0


def _run_projects(config) -> int:
    projects = _build_agents(config, with_engine=False).list_projects()
    if not projects:
        print("No projects initialized yet. Run: cca init [path]")
        return 0
    for name in projects:
        print(name)
    return 0


def _run_show(args: argparse.Namespace, config) -> int:
    from cca.errors import CCAError

    try:
        structure = _build_agents(config, with_engine=False).show_project(args.project)
    except CCAError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if structure is None:
        print(f'No context exists for project "{args.project}".', file=sys.stderr)
        return 1
    print(f"{structure.project}/")
    for domain in structure.domains:
        print(f"  {domain.name}/")
        for topic in domain.topics:
            print(f"    {topic}.md")
    return 0


def _run_serve(config) -> int:
    from cca.mcp_server import run_server

    run_server(_build_agents(config))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = load_config()
    _setup_logging(config.log_level)

    if args.command == "init":
        return _run_init(args, config)
    if args.command == "search":
        return _run_search(args, config)
    if args.command == "update":
        return _run_update(args, config)
    if args.command == "projects":
        return _run_projects(config)
    if args.command == "show":
        return _run_show(args, config)
    return _run_serve(config)


if __name__ == "__main__":
    sys.exit(main())
