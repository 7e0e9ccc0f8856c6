"""CLI for blockstrings - string identifiers in block workspaces."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any, Callable

from . import __version__
from .core.errors import BlockstringsError
from .core.strings import all_strings, generate_unique_name, rename_string
from .flyout import flyout_category, flyout_xml, sorted_strings
from .runtime import build_runtime


def _version_string() -> str:
    return (
        f"blockstrings {__version__} "
        f"(python {platform.python_version()}, platform {platform.system().lower()})"
    )


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List string names in use."""
    root: Any = rt.workspace
    if args.root:
        root = rt.workspace.get_block_by_id(args.root)
        if root is None:
            print(f"Error: Block {args.root} not found", file=sys.stderr)
            return 1

    names = all_strings(root)
    if args.sort:
        names = sorted(names, key=str.lower)

    if args.json:
        print(json.dumps(names))
    else:
        for name in names:
            print(name)
    return 0


def cmd_suggest(args: argparse.Namespace, rt: Any) -> int:
    """Print a string name not yet used in the workspace."""
    name = generate_unique_name(rt.workspace)
    if args.json:
        print(json.dumps({"name": name}))
    else:
        print(name)
    return 0


def cmd_rename(args: argparse.Namespace, rt: Any) -> int:
    """Rename a string name in every block."""
    rename_string(args.old, args.new, rt.workspace)

    if args.write:
        rt.store.save(rt.workspace)
        if not args.quiet:
            print(f"Renamed {args.old} -> {args.new} in {rt.store.path}")
    else:
        sys.stdout.write(rt.store.codec.encode(rt.workspace))
    return 0


def cmd_flyout(args: argparse.Namespace, rt: Any) -> int:
    """Print flyout block templates for the string category."""
    flyout = rt.config.flyout
    blocks = flyout_category(
        rt.workspace, flyout.block_types, default_name=flyout.default_name
    )
    if args.json:
        print(json.dumps({
            "names": sorted_strings(rt.workspace, flyout.default_name),
            "xml": flyout_xml(blocks),
        }))
    else:
        print(flyout_xml(blocks))
    return 0


def _resolve_token(mode: str, generate: Callable[[], str]) -> str | None:
    """Map --token to a bearer token: 'auto' generates one, 'none' disables auth."""
    if mode == "none":
        print("Warning: authentication disabled; bind to a trusted interface only.")
        return None
    if mode == "auto":
        token = generate()
        print(f"Bearer token: {token}")
        return token
    return mode


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Serve the workspace's string names over the local JSON API."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(f"Error: serve needs the api extra (pip install blockstrings[api]): {e}", file=sys.stderr)
        return 1

    token = _resolve_token(args.token, generate_token)
    app = create_app(rt, token=token, enable_cors=args.cors)

    print(f"Serving {rt.store.path} on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="blockstr", description="Blockstrings CLI"
    )
    parser.add_argument(
        "--version", action="version", version=_version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd, then next to the workspace)",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=None,
        help="Path to workspace YAML document (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # ls command
    parser_ls = subparsers.add_parser("ls", help="List string names in use")
    parser_ls.add_argument(
        "--root", default=None, help="Only look under the block with this id"
    )
    parser_ls.add_argument(
        "--sort", action="store_true", help="Sort case-insensitively"
    )

    # suggest command
    subparsers.add_parser("suggest", help="Print an unused string name")

    # rename command
    parser_rename = subparsers.add_parser("rename", help="Rename a string name")
    parser_rename.add_argument("old", help="Current name")
    parser_rename.add_argument("new", help="New name")
    parser_rename.add_argument(
        "--write", action="store_true",
        help="Write the workspace back instead of printing it"
    )

    # flyout command
    subparsers.add_parser("flyout", help="Print flyout block templates as XML")

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=8766, help="Port to bind to (default: 8766)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token: 'auto' (generate), 'none' (disable auth), or custom token"
    )
    parser_serve.add_argument(
        "--cors", action="store_true", help="Enable CORS for localhost"
    )

    args = parser.parse_args()

    try:
        rt = build_runtime(
            workspace_path=args.workspace,
            config_path=args.config,
        )
    except (BlockstringsError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    level = logging.DEBUG if args.verbose else logging.getLevelName(rt.config.log.level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "ls": cmd_ls,
        "suggest": cmd_suggest,
        "rename": cmd_rename,
        "flyout": cmd_flyout,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
