"""Visit counter client tool.

Usage:
    python -m vinculo.tools.visits visit profiles abc123
    python -m vinculo.tools.visits visit family-profiles garcia --initial 10
    python -m vinculo.tools.visits status profiles abc123
    python -m vinculo.tools.visits list
    python -m vinculo.tools.visits reset                  # every kind
    python -m vinculo.tools.visits reset family-profiles  # one kind
    python -m vinculo.tools.visits reset profiles abc123  # one slug
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from vinculo.adapters.guard_store.json_file_store import JsonFileGuardStore
from vinculo.config import settings
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey
from vinculo.infrastructure.client.container import VisitClientContainer

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

KINDS = [k.value for k in ResourceKind]


async def visit(container: VisitClientContainer, kind: ResourceKind, slug: str, initial: int) -> int:
    tracker = container.tracker(kind, slug, initial_count=initial)
    snapshot = await tracker.mount()
    if snapshot.error:
        print(f"{kind.value}/{slug}: error: {snapshot.error}")
        return 1
    print(f"{kind.value}/{slug}: {snapshot.visit_count} visits")
    return 0


def status(container: VisitClientContainer, kind: ResourceKind, slug: str) -> int:
    key = ResourceKey(kind=kind, slug=slug)
    eligible = container.guard.can_increment(key)
    print(f"{key}: {container.guard.state(key).value} ({'eligible' if eligible else 'already counted'})")
    return 0


def list_completed(store: JsonFileGuardStore) -> int:
    entries = store.entries()
    if not any(entries.values()):
        print("No counted visits recorded")
        return 0
    for kind, slugs in sorted(entries.items()):
        for slug in slugs:
            print(f"{kind}:{slug}")
    return 0


def reset(container: VisitClientContainer, kind: ResourceKind | None, slug: str | None) -> int:
    if kind is not None and slug:
        container.guard.reset(ResourceKey(kind=kind, slug=slug))
        logger.info("Reset %s/%s", kind.value, slug)
    else:
        container.guard.reset_all(kind)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Eterno Vínculo visit counter client")
    parser.add_argument(
        "--store", type=str, default=None,
        help=f"Guard record path (default: {settings.guard_store_path})",
    )
    parser.add_argument(
        "--api", type=str, default=None,
        help=f"API base URL (default: {settings.api_base_url})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_visit = sub.add_parser("visit", help="Register a visit unless already counted")
    p_visit.add_argument("kind", choices=KINDS)
    p_visit.add_argument("slug")
    p_visit.add_argument("--initial", type=int, default=0, help="Count shown before the server answers")

    p_status = sub.add_parser("status", help="Show whether a visit would be counted")
    p_status.add_argument("kind", choices=KINDS)
    p_status.add_argument("slug")

    sub.add_parser("list", help="List counted visits in the guard record")

    p_reset = sub.add_parser("reset", help="Forget counted visits")
    p_reset.add_argument("kind", nargs="?", choices=KINDS)
    p_reset.add_argument("slug", nargs="?")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    overrides = {}
    if args.store:
        overrides["guard_store_path"] = Path(args.store)
    if args.api:
        overrides["api_base_url"] = args.api
    config = settings.model_copy(update=overrides)
    store = JsonFileGuardStore(config.guard_store_path)

    if args.command == "list":
        return list_completed(store)

    async def run() -> int:
        async with VisitClientContainer(config, store=store) as container:
            kind = ResourceKind(args.kind) if args.kind else None
            if args.command == "visit":
                return await visit(container, kind, args.slug, args.initial)
            if args.command == "status":
                return status(container, kind, args.slug)
            return reset(container, kind, args.slug)

    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
