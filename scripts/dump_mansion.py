#!/usr/bin/env python3
"""Dump the mansion layout, the suspect directory and a simulated walk.

Usage:
    python scripts/dump_mansion.py
    python scripts/dump_mansion.py --show-buckets --room Library
    python scripts/dump_mansion.py --path eed --accuse Gardener
    python scripts/dump_mansion.py --path dd --explicit-quit --json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from detective_quest.accusation import AccusationAborted, accuse
from detective_quest.game import ExplorationController, ExplorationError
from detective_quest.mansion import (
    build_mansion,
    find_room,
    render_mansion,
    validate_mansion,
)
from detective_quest.suspects import build_suspect_table


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dump the Detective Quest mansion and evidence structures.",
    )
    parser.add_argument(
        "--path",
        default="",
        help="Navigation keys to simulate from the entrance, e.g. 'ee' or 'de'",
    )
    parser.add_argument(
        "--accuse",
        action="append",
        default=[],
        help="Suspect to tally evidence against after the walk (repeatable)",
    )
    parser.add_argument(
        "--explicit-quit",
        action="store_true",
        help="Do not stop automatically at dead ends",
    )
    parser.add_argument(
        "--show-buckets",
        action="store_true",
        help="Include the hash bucket chains of the suspect directory",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON document instead of text",
    )
    parser.add_argument(
        "--room",
        help="Only draw the part of the mansion below this room (exact name)",
    )
    return parser.parse_args(argv)


def _main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    mansion = build_mansion()
    drawn = mansion
    if args.room:
        drawn = find_room(mansion, args.room)
        if drawn is None:
            print(f"ERROR: no room named '{args.room}' in the mansion.", file=sys.stderr)
            return 2
    problems = validate_mansion(mansion)
    table = build_suspect_table()

    controller = ExplorationController(
        mansion, auto_stop_at_leaves=not args.explicit_quit
    )
    rejected: list[dict[str, str]] = []
    for key in args.path:
        if controller.finished:
            break
        try:
            controller.process_command(key)
        except ExplorationError as exc:
            rejected.append({"key": key, "room": controller.current.name, "error": str(exc)})

    accusations: list[dict[str, Any]] = []
    for name in args.accuse:
        try:
            result = accuse(table, controller.clue_root, name)
        except AccusationAborted as exc:
            rejected.append({"accuse": name, "error": str(exc)})
            continue
        accusations.append(result.model_dump(mode="json"))

    output: dict[str, Any] = {
        "problems": problems,
        "exploration": controller.state.model_dump(),
        "rejected": rejected,
        "clues": controller.clues,
        "accusations": accusations,
    }
    if args.show_buckets:
        output["buckets"] = {
            str(i): table.chain(i) for i in range(table.bucket_count)
        }

    if args.json:
        print(json.dumps(output, indent=2, sort_keys=True))
    else:
        print("=== Mansion ===")
        print(render_mansion(drawn))
        for p in problems:
            print(f"  x {p}")
        print(f"\n=== Walk '{args.path}' ===")
        print("  visited: " + " -> ".join(controller.state.visited_rooms))
        print(f"  status:  {controller.state.status} ({controller.state.finish_reason})")
        for r in rejected:
            if "key" in r:
                print(f"  rejected '{r['key']}' in {r['room']}: {r['error']}")
            else:
                print(f"  rejected accusation '{r['accuse']}': {r['error']}")
        print("\n=== Clues (sorted) ===")
        for clue in output["clues"]:
            print(f"  - {clue} -> {table.lookup(clue)}")
        for result in output["accusations"]:
            print(f"\n  {result['suspect']}: tally {result['tally']} ({result['verdict']})")
        if args.show_buckets:
            print("\n=== Suspect directory buckets ===")
            for index, chain in output["buckets"].items():
                entries = ", ".join(f"{c!r}->{s}" for c, s in chain) or "(empty)"
                print(f"  [{index}] {entries}")

    return 1 if problems else 0


if __name__ == "__main__":
    raise SystemExit(_main())
