"""Terminal collaborator: line input, text output, screen clearing, reports."""

import os
import sys
from typing import Callable, Optional, TextIO

from .models import AccusationResult, SessionReport, Verdict

PROMPT = "\n> "
ACCUSE_PROMPT = "\nWho do you accuse? "


class ConsoleIO:
    def __init__(
        self,
        input_fn: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
    ):
        self._input = input_fn or input
        self._out = out or sys.stdout

    def write(self, text: str):
        print(text, file=self._out)

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self._input(prompt)
        except EOFError:
            return None

    def read_command(self) -> Optional[str]:
        return self._read(PROMPT)

    def read_suspect_name(self) -> Optional[str]:
        line = self._read(ACCUSE_PROMPT)
        if line is None:
            return None
        return line.rstrip("\r\n")

    def clear_screen(self):
        if self._out.isatty():
            os.system("cls" if os.name == "nt" else "clear")


# ── Report rendering ────────────────────────────────────────


def render_clue_list(clues: list[str]) -> str:
    if not clues:
        return "No clues collected."
    return "\n".join(f"- {clue}" for clue in clues)


def render_associations(associations: list[tuple[str, str]]) -> str:
    return "\n".join(f"{clue} -> {suspect}" for clue, suspect in associations)


def render_verdict(result: AccusationResult) -> str:
    if result.verdict == Verdict.CONFIRMED:
        return (
            f"Accusation confirmed: {result.tally} clues point to "
            f"{result.suspect}. Case closed!"
        )
    if result.verdict == Verdict.WEAK:
        return (
            f"Weak accusation: only {result.tally} clue points to "
            f"{result.suspect}. Not enough evidence."
        )
    return f"Unsupported accusation: no clue points to {result.suspect}."


def render_report(report: SessionReport) -> str:
    sections = [
        "=" * 46,
        "          COLLECTED CLUES (SORTED)",
        "=" * 46,
        render_clue_list(report.clues),
        "",
        "Clue -> suspect associations:",
        render_associations(report.associations),
    ]
    if report.accusation is not None:
        sections += ["", render_verdict(report.accusation)]
    return "\n".join(sections)
