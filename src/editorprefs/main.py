# src/editorprefs/main.py — v1
"""CLI entry point — diff, show, bind and cache commands.

Usage:
    editorprefs diff <base.json> <target.json>
    editorprefs show
    editorprefs bind <keystroke> [action] --defaults <defaults.json>
    editorprefs cache {get,put,purge,size} ...
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from editorprefs.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="editorprefs",
        description=f"editorprefs v{__version__} — Editor key-binding and cache persistence",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- diff ---
    p_diff = subparsers.add_parser(
        "diff", help="Print the patch turning one keymap document into another",
    )
    p_diff.add_argument("base", type=Path, help="Base JSON document")
    p_diff.add_argument("target", type=Path, help="Target JSON document")
    p_diff.set_defaults(func=_cmd_diff)

    # --- show ---
    p_show = subparsers.add_parser(
        "show", help="Print the stored keymap overrides for this platform",
    )
    p_show.add_argument(
        "--platform", default=None,
        help="Platform identifier (default: detected or PLATFORM_OVERRIDE)",
    )
    p_show.set_defaults(func=_cmd_show)

    # --- bind ---
    p_bind = subparsers.add_parser(
        "bind", help="Bind a keystroke to an action (omit action to unbind)",
    )
    p_bind.add_argument("keystroke", help="Keystroke descriptor, e.g. 'Ctrl+Shift+F'")
    p_bind.add_argument("action", nargs="?", default=None, help="Action name")
    p_bind.add_argument(
        "--defaults", type=Path, required=True,
        help="JSON file with the editor's built-in keystroke -> action bindings",
    )
    p_bind.add_argument(
        "--platform", default=None,
        help="Platform identifier (default: detected or PLATFORM_OVERRIDE)",
    )
    p_bind.set_defaults(func=_cmd_bind)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Inspect or modify the local cache")
    cache_sub = p_cache.add_subparsers(dest="cache_command")

    p_get = cache_sub.add_parser("get", help="Print a cached value")
    p_get.add_argument("key")
    p_get.set_defaults(func=_cmd_cache_get)

    p_put = cache_sub.add_parser("put", help="Store a value with eviction on overflow")
    p_put.add_argument("key")
    p_put.add_argument("value")
    p_put.add_argument(
        "--timestamp", action="store_true",
        help="Record a timestamp so the entry can age out",
    )
    p_put.set_defaults(func=_cmd_cache_put)

    p_purge = cache_sub.add_parser("purge", help="Remove timestamped entries older than an age")
    p_purge.add_argument("--max-age-ms", type=int, required=True)
    p_purge.set_defaults(func=_cmd_cache_purge)

    p_size = cache_sub.add_parser("size", help="Print the serialised cache size")
    p_size.set_defaults(func=_cmd_cache_size)

    return parser


def _read_document(path: Path) -> dict[str, str | None]:
    from editorprefs.keybindings.models import validate_document

    return validate_document(json.loads(path.read_text(encoding="utf-8")))


async def _cmd_diff(args: argparse.Namespace) -> int:
    """Print config_diff(base, target)."""
    from editorprefs.keybindings.diff import config_diff

    for path in (args.base, args.target):
        if not path.exists():
            logger.error("File not found: %s", path)
            return 1

    patch = config_diff(_read_document(args.base), _read_document(args.target))
    print(json.dumps(patch, indent=2))
    return 0


async def _cmd_show(args: argparse.Namespace) -> int:
    """Print the remote keymap document."""
    from editorprefs.config.settings import Settings
    from editorprefs.keybindings.os_identity import keymap_config_name
    from editorprefs.remote.service_factory import create_config_service

    settings = Settings()
    remote = create_config_service(settings)
    name = keymap_config_name(args.platform or settings.platform_override or None)
    document = await remote.fetch(name)
    print(json.dumps(document, indent=2))
    return 0


async def _cmd_bind(args: argparse.Namespace) -> int:
    """Apply one binding change on top of stored overrides and persist it."""
    from editorprefs.config.settings import Settings
    from editorprefs.keybindings.coordinator import BindingSyncCoordinator
    from editorprefs.keybindings.editor import InMemoryEditorSurface
    from editorprefs.remote.service_factory import create_config_service

    if not args.defaults.exists():
        logger.error("File not found: %s", args.defaults)
        return 1

    settings = Settings()
    coordinator = BindingSyncCoordinator(
        remote=create_config_service(settings),
        platform_id=args.platform or settings.platform_override or None,
    )
    editor = InMemoryEditorSurface(bindings=_read_document(args.defaults))
    installed = await coordinator.install_on(editor)
    if not installed.ok:
        return 1

    outcome = await coordinator.set_binding(args.keystroke, args.action)
    if not outcome.ok:
        return 1

    print(f"\nStored {outcome.config_name}:")
    print(json.dumps(outcome.document, indent=2))
    return 0


def _open_store():
    from editorprefs.cache.evicting_store import EvictingKeyValueStore
    from editorprefs.cache.medium_factory import create_store_medium
    from editorprefs.config.settings import Settings

    settings = Settings()
    return EvictingKeyValueStore(
        create_store_medium(settings),
        max_attempts=settings.cache_max_safe_attempts,
    )


async def _cmd_cache_get(args: argparse.Namespace) -> int:
    value = _open_store().get(args.key)
    if value is None:
        logger.error("Key not found: %s", args.key)
        return 1
    print(value)
    return 0


async def _cmd_cache_put(args: argparse.Namespace) -> int:
    stored = _open_store().write_safely(
        args.key, args.value, include_timestamp=args.timestamp
    )
    return 0 if stored else 1


async def _cmd_cache_purge(args: argparse.Namespace) -> int:
    removed = _open_store().purge_stale(args.max_age_ms)
    print(f"Removed {len(removed)} keys")
    return 0


async def _cmd_cache_size(args: argparse.Namespace) -> int:
    print(_open_store().size_in_bytes())
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from editorprefs.config.settings import Settings
    from editorprefs.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file or None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
