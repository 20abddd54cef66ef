# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Namespace Config Contributors
"""Command-line access to the namespace API.

Usage:
    namespace-config list
    namespace-config show --code default
    namespace-config export --id 42 -o ns.json
    namespace-config import ns.json
    namespace-config --base-url http://localhost:18080 delete 42
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from namespace_config.config import get_settings
from namespace_config.errors import NamespaceError
from namespace_config.model import NamespaceConfigModel
from namespace_config.schemas.namespace import Namespace
from namespace_config.services.namespace_service import HttpNamespaceService


def _add_selector(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--id", dest="namespace_id", help="Namespace id")
    group.add_argument("--code", help="Namespace code")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="namespace-config", description="Manage namespaces on a remote API"
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="API base URL (default: NAMESPACE_CONFIG_BASE_URL or settings)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all namespaces")
    sub.add_parser("codes", help="List all namespace codes")

    show = sub.add_parser("show", help="Show one namespace")
    _add_selector(show)

    export = sub.add_parser("export", help="Export one namespace as JSON")
    _add_selector(export)
    export.add_argument("-o", "--output", type=Path, help="Write to FILE instead of stdout")

    import_ = sub.add_parser("import", help="Create a namespace from exported JSON")
    import_.add_argument("file", type=Path)

    delete = sub.add_parser("delete", help="Delete a namespace")
    delete.add_argument("namespace_id")
    return parser


def _format_row(namespace: Namespace) -> str:
    return f"{namespace.id or '-':<12} {namespace.code:<20} {namespace.name}"


async def _load_selected(model: NamespaceConfigModel, args: argparse.Namespace) -> Namespace:
    if args.namespace_id is not None:
        return await model.load_by_id(args.namespace_id)
    return await model.load_by_code(args.code)


async def run(args: argparse.Namespace, model: NamespaceConfigModel) -> None:
    """Execute the parsed command against *model*."""
    match args.command:
        case "list":
            for namespace in await model.load_all():
                print(_format_row(namespace))
        case "codes":
            for code in await model.all_codes():
                print(code)
        case "show":
            namespace = await _load_selected(model, args)
            print(model.export_to_json(namespace))
        case "export":
            text = model.export_to_json(await _load_selected(model, args))
            if args.output is not None:
                args.output.write_text(text + "\n", encoding="utf-8")
                print(f"Wrote {args.output}")
            else:
                print(text)
        case "import":
            namespace = model.import_from_json(args.file.read_text(encoding="utf-8"))
            created = await model.save(namespace, is_import=True)
            print(f"Created namespace {created.code} (id={created.id})")
        case "delete":
            await model.delete(args.namespace_id)
            print(f"Deleted namespace {args.namespace_id}")


async def _main(args: argparse.Namespace) -> None:
    async with NamespaceConfigModel(HttpNamespaceService(args.base_url)) as model:
        await run(args, model)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        logging.basicConfig(level=get_settings().log_level.upper())
        asyncio.run(_main(args))
    except (NamespaceError, ValidationError, OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
