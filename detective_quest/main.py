import argparse
import logging
import os
import sys
from typing import Optional

from .accusation import AccusationAborted, accuse
from .clues import collect_clues, release_clues
from .console import ConsoleIO, render_report, render_verdict
from .game import ExplorationController
from .mansion import build_mansion, release_topology
from .models import SessionReport
from .suspects import SuspectTable, build_suspect_table

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = os.getenv("DETECTIVE_QUEST_LOG_LEVEL", "WARNING")

BANNER = "\n".join(
    [
        "=" * 46,
        "   DETECTIVE QUEST - THE MANSION MYSTERY",
        "=" * 46,
    ]
)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="detective-quest",
        description="Explore the mansion, collect clues and accuse a suspect.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging level for diagnostics on stderr (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument(
        "--explicit-quit",
        action="store_true",
        help="Keep exploring at dead ends; only (s) ends the walk",
    )
    return parser.parse_args(argv)


def build_report(controller: ExplorationController, table: SuspectTable) -> SessionReport:
    clues = collect_clues(controller.clue_root)
    return SessionReport(
        clues=clues,
        associations=[(clue, table.lookup(clue)) for clue in clues],
    )


def play(io: ConsoleIO, auto_stop_at_leaves: bool = True) -> SessionReport:
    """Run one full session: explore, accuse, report."""
    mansion = build_mansion()
    table = build_suspect_table()
    controller = ExplorationController(
        mansion,
        auto_stop_at_leaves=auto_stop_at_leaves,
        clear_screen=io.clear_screen,
    )

    io.clear_screen()
    io.write(BANNER)
    controller.run(io)

    report = build_report(controller, table)
    io.write("")
    io.write(render_report(report))

    io.write("\nSuspects: " + ", ".join(table.suspects()))
    while report.accusation is None:
        name = io.read_suspect_name()
        if name is None:
            io.write("No accusation made.")
            break
        try:
            report.accusation = accuse(table, controller.clue_root, name)
        except AccusationAborted as exc:
            logger.debug("Accusation rejected: %s", exc)
            io.write(str(exc))

    if report.accusation is not None:
        io.write("")
        io.write(render_verdict(report.accusation))

    release_topology(mansion)
    release_clues(controller.clue_root)
    table.release()

    io.write("\nExploration over. The mystery is nearly solved!")
    return report


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        play(ConsoleIO(), auto_stop_at_leaves=not args.explicit_quit)
    except MemoryError:
        print("Error: out of memory while building the mansion", file=sys.stderr)
        return 1
    return 0
