"""
UI Metadata MCP Server.

Exposes assembled UI metadata (windows, processes, menus, toolbars) from a
dictionary snapshot to LLM clients via the Model Context Protocol.

Usage:
    # Local mode (reads a snapshot file)
    python -m mcp_server --snapshot /path/to/dictionary.json --role 0

    # GitHub mode (reads a snapshot from a GitHub repo)
    python -m mcp_server --github owner/repo --path dictionary.json --role 0

    Requires GITHUB_TOKEN env var for private repos (or to avoid rate limits).
"""

from __future__ import annotations

import json
import logging
import os
import sys

from mcp.server.fastmcp import FastMCP

from mcp_server.datasource import GitHubSnapshotSource, LocalSnapshotSource, SnapshotSource
from ui_metadata.assembly import (
    AssemblyScope,
    MenuAssembler,
    ProcessAssembler,
    ToolbarAssembler,
    WindowAssembler,
)
from ui_metadata.config import AssemblyOptions, MetadataContext, configure_logging
from ui_metadata.dictionary import DictionaryRepository
from ui_metadata.domain.enums import EntityKind
from ui_metadata.errors import MetadataError
from ui_metadata.resolution.projection import identifier

logger = logging.getLogger(__name__)

# ── Globals ─────────────────────────────────────────────────────────────

_repository: DictionaryRepository | None = None
_default_role: str | None = None
mcp = FastMCP("ui-metadata")


def _dictionary() -> DictionaryRepository:
    if _repository is None:
        raise RuntimeError("Dictionary not loaded")
    return _repository


def _scope(role_id: str | None, language: str | None) -> AssemblyScope:
    options = AssemblyOptions.from_env()
    role = role_id or _default_role
    if role is None:
        raise RuntimeError("No role given and no default role configured")
    context = MetadataContext(role_id=role, language=language or options.language)
    return AssemblyScope(repository=_dictionary(), context=context, options=options)


def _error(e: MetadataError) -> dict:
    return {"error": e.message, "status": e.http_status}


def _truncate(data: dict | list, max_chars: int = 80_000) -> dict | list:
    text = json.dumps(data, ensure_ascii=False, default=str)
    if len(text) <= max_chars:
        return data
    return {
        "_truncated": True,
        "_message": f"Response too large ({len(text):,} chars). Use get_toolbar or a single tab instead.",
    }


# ── Tools ───────────────────────────────────────────────────────────────


@mcp.tool()
def list_windows(role_id: str | None = None, language: str | None = None) -> list[dict]:
    """List the windows a role can open.

    Call this first to discover window ids for get_window and get_toolbar.

    Args:
        role_id: Role whose grants apply (defaults to the server's --role).
        language: Language code for window names (e.g. "es_ES").
    """
    scope = _scope(role_id, language)
    repository = scope.repository
    windows = []
    for access in repository.query(
        EntityKind.WINDOW_ACCESS, lambda a: a.role_id == scope.context.role_id and a.active,
    ):
        window = repository.get(EntityKind.WINDOW, access.window_id)
        if window is None:
            continue
        windows.append({"id": window.id, "name": identifier(window, scope.language)})
    return windows


@mcp.tool()
def get_window(window_id: str, role_id: str | None = None, language: str | None = None) -> dict:
    """Get the full metadata document of a window: tabs, fields, selectors, processes.

    Args:
        window_id: Window id (from list_windows).
        role_id: Role whose grants apply (defaults to the server's --role).
        language: Language code for translated labels.
    """
    try:
        return _truncate(WindowAssembler(_scope(role_id, language)).build(window_id))
    except MetadataError as e:
        return _error(e)


@mcp.tool()
def get_process(process_id: str, role_id: str | None = None, language: str | None = None) -> dict:
    """Get a process definition with its ordered parameters.

    Args:
        process_id: Process definition id.
        role_id: Role whose grants apply to window-reference parameters.
        language: Language code for translated labels.
    """
    try:
        return ProcessAssembler(_scope(role_id, language)).build_definition(process_id)
    except MetadataError as e:
        return _error(e)


@mcp.tool()
def get_report_and_process(process_id: str, role_id: str | None = None, language: str | None = None) -> dict:
    """Get a legacy report or process with its parameters keyed by column name.

    Args:
        process_id: Legacy process id.
        role_id: Role whose grants apply to window-reference parameters.
        language: Language code for translated labels.
    """
    try:
        return ProcessAssembler(_scope(role_id, language)).build_legacy(process_id)
    except MetadataError as e:
        return _error(e)


@mcp.tool()
def get_menu(role_id: str | None = None, language: str | None = None) -> dict:
    """Get the menu tree visible to a role.

    Args:
        role_id: Role whose grants filter the menu.
        language: Language code for translated labels.
    """
    try:
        return MenuAssembler(_scope(role_id, language)).build()
    except MetadataError as e:
        return _error(e)


@mcp.tool()
def get_toolbar(window_id: str, tab_id: str | None = None, is_new: bool = False,
                role_id: str | None = None, language: str | None = None) -> dict:
    """Get the toolbar buttons of a window, with process buttons for one tab or all tabs.

    Args:
        window_id: Window id.
        tab_id: Optional tab id restricting the process buttons.
        is_new: Whether the toolbar is for a new, unsaved record.
        role_id: Role whose grants apply.
        language: Language code for button labels.
    """
    try:
        return ToolbarAssembler(_scope(role_id, language)).build(window_id, tab_id=tab_id, is_new=is_new)
    except MetadataError as e:
        return _error(e)


# ── Entry point ─────────────────────────────────────────────────────────

def main():
    import argparse

    parser = argparse.ArgumentParser(description="UI Metadata MCP Server")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--snapshot", default=os.getenv("UI_METADATA_SNAPSHOT"),
                       help="Dictionary snapshot JSON file (default: $UI_METADATA_SNAPSHOT)")
    group.add_argument("--github", metavar="OWNER/REPO", help="GitHub repository holding the snapshot")
    parser.add_argument("--path", default="dictionary.json", help="Snapshot path in repo (default: dictionary.json)")
    parser.add_argument("--branch", default="main", help="Git branch (default: main)")
    parser.add_argument("--role", default=os.getenv("UI_METADATA_ROLE"),
                        help="Default role id (default: $UI_METADATA_ROLE)")

    args = parser.parse_args()
    configure_logging()

    source: SnapshotSource
    if args.github:
        parts = args.github.split("/", 1)
        if len(parts) != 2:
            print("Error: --github must be OWNER/REPO format", file=sys.stderr)
            sys.exit(1)
        source = GitHubSnapshotSource(owner=parts[0], repo=parts[1], path=args.path, branch=args.branch)
    elif args.snapshot:
        source = LocalSnapshotSource(args.snapshot)
    else:
        print("Error: --snapshot or --github is required", file=sys.stderr)
        sys.exit(1)

    global _repository, _default_role
    try:
        _repository = source.load()
    except (FileNotFoundError, MetadataError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    _default_role = args.role
    logger.info("Serving UI metadata from %s", source.describe())

    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
