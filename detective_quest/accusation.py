"""Accusation engine: tally collected evidence against a named suspect."""

import logging
from typing import Optional

from .clues import ClueNode, traverse_in_order
from .models import AccusationResult, Verdict
from .suspects import SuspectTable

logger = logging.getLogger(__name__)

CONFIRMING_TALLY = 2


class AccusationAborted(ValueError):
    pass


def _supporting_clues(
    table: SuspectTable, clue_root: Optional[ClueNode], suspect_name: str
) -> list[str]:
    matches: list[str] = []

    def visit(text: str):
        if table.lookup(text) == suspect_name:
            matches.append(text)

    traverse_in_order(clue_root, visit)
    return matches


def tally(table: SuspectTable, clue_root: Optional[ClueNode], suspect_name: str) -> int:
    """Number of collected clues that resolve exactly to `suspect_name`."""
    return len(_supporting_clues(table, clue_root, suspect_name))


def verdict(count: int) -> Verdict:
    if count < 0:
        raise ValueError(f"Tally cannot be negative: {count}")
    if count >= CONFIRMING_TALLY:
        return Verdict.CONFIRMED
    if count == 1:
        return Verdict.WEAK
    return Verdict.UNSUPPORTED


def accuse(
    table: SuspectTable, clue_root: Optional[ClueNode], suspect_name: str
) -> AccusationResult:
    """Tally evidence against `suspect_name`, matched exactly as given."""
    if not (suspect_name or "").strip():
        raise AccusationAborted("No suspect named, accusation aborted.")

    clues = _supporting_clues(table, clue_root, suspect_name)
    result = AccusationResult(
        suspect=suspect_name,
        tally=len(clues),
        verdict=verdict(len(clues)),
        supporting_clues=clues,
    )
    logger.info(
        "Accused %s: %d supporting clue(s), verdict %s",
        suspect_name,
        result.tally,
        result.verdict.value,
    )
    return result
