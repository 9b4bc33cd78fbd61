"""End-to-end tests for the interactive session and the CLI entry point."""

import builtins
import io
import logging

import pytest

from detective_quest import console as console_module
from detective_quest import main as main_module
from detective_quest.console import (
    ConsoleIO,
    render_clue_list,
    render_verdict,
)
from detective_quest.main import main, play
from detective_quest.models import AccusationResult, Verdict


def _feed(monkeypatch, lines):
    queue = list(lines)

    def fake_input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)


# ---------------------------------------------------------------------------
# play()
# ---------------------------------------------------------------------------


def test_play_study_path_accuse_housekeeper(scripted_io):
    io = scripted_io(commands=["e", "e"], names=["Housekeeper"])
    report = play(io)

    assert report.clues == [
        "mud footprints by the front door",
        "sealed envelope with red wax",
        "torn diary page",
    ]
    assert report.associations == [
        ("mud footprints by the front door", "Gardener"),
        ("sealed envelope with red wax", "Housekeeper"),
        ("torn diary page", "Housekeeper"),
    ]
    assert report.accusation.verdict == Verdict.CONFIRMED
    assert "- sealed envelope with red wax" in io.text
    assert "torn diary page -> Housekeeper" in io.text
    assert "Accusation confirmed: 2 clues point to Housekeeper. Case closed!" in io.output


def test_play_blank_name_reprompts(scripted_io):
    io = scripted_io(commands=["d", "s"], names=["   ", "Madame Sinclair"])
    report = play(io)
    assert "No suspect named, accusation aborted." in io.output
    assert report.accusation.suspect == "Madame Sinclair"
    assert report.accusation.tally == 1
    assert report.accusation.verdict == Verdict.WEAK


def test_play_without_accusation(scripted_io):
    io = scripted_io(commands=["s"], names=[])
    report = play(io)
    assert report.accusation is None
    assert report.clues == ["mud footprints by the front door"]
    assert "No accusation made." in io.output


def test_play_explicit_quit_mode_keeps_going_at_dead_end(scripted_io):
    io = scripted_io(commands=["d", "d", "e", "s"], names=["Gardener"])
    report = play(io, auto_stop_at_leaves=False)
    assert "There is no room to the left!" in io.output
    assert report.accusation.tally == 1


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


def test_main_exits_zero(monkeypatch, capsys):
    _feed(monkeypatch, ["E", "d", "Gardener"])
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "You are in: Garden" in out
    assert "- old key among the flowers" in out
    assert "old key among the flowers -> Gardener" in out
    assert "Accusation confirmed: 2 clues point to Gardener. Case closed!" in out


def test_main_ignores_bad_input(monkeypatch, capsys):
    _feed(monkeypatch, ["?", "", "s", "Nobody"])
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Invalid option! Try again." in out
    assert "Unsupported accusation: no clue points to Nobody." in out


def test_main_memory_error(monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(main_module, "build_mansion", boom)
    assert main([]) == 1
    assert "out of memory" in capsys.readouterr().err


def test_main_rejects_bad_log_level():
    with pytest.raises(SystemExit):
        main(["--log-level", "chatty"])


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def test_render_clue_list():
    assert render_clue_list(["a", "b"]) == "- a\n- b"
    assert render_clue_list([]) == "No clues collected."


def test_render_weak_verdict():
    result = AccusationResult(suspect="Gardener", tally=1, verdict=Verdict.WEAK)
    assert render_verdict(result) == (
        "Weak accusation: only 1 clue points to Gardener. Not enough evidence."
    )


def test_console_strips_only_line_ending():
    io = ConsoleIO(input_fn=lambda prompt: "  Housekeeper \n")
    assert io.read_suspect_name() == "  Housekeeper "


def test_console_eof_returns_none():
    def closed(prompt):
        raise EOFError

    io = ConsoleIO(input_fn=closed)
    assert io.read_command() is None
    assert io.read_suspect_name() is None


def test_clear_screen_skipped_when_not_a_tty(monkeypatch):
    calls = []
    monkeypatch.setattr(console_module.os, "system", calls.append)
    ConsoleIO(out=io.StringIO()).clear_screen()
    assert calls == []


def test_clear_screen_on_a_tty(monkeypatch):
    class Terminal(io.StringIO):
        def isatty(self):
            return True

    calls = []
    monkeypatch.setattr(console_module.os, "system", calls.append)
    ConsoleIO(out=Terminal()).clear_screen()
    assert calls in (["clear"], ["cls"])


# ---------------------------------------------------------------------------
# Logging of player mistakes
# ---------------------------------------------------------------------------


def test_player_mistakes_logged_below_warning(scripted_io, caplog):
    caplog.set_level(logging.DEBUG, logger="detective_quest")
    io_ = scripted_io(commands=["x", "d", "e", "s"], names=["", "Gardener"])
    play(io_)

    assert "Invalid option! Try again." in io_.output
    assert "No suspect named, accusation aborted." in io_.output
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
    rejected = [r for r in caplog.records if "Rejected command" in r.getMessage()]
    assert len(rejected) == 2
    assert all(r.levelno == logging.DEBUG for r in rejected)


def test_default_logging_keeps_stderr_clean(monkeypatch, capsys):
    # Let basicConfig install its own stderr handler as it does outside pytest
    monkeypatch.setattr(logging.root, "handlers", [])
    monkeypatch.setattr(logging.root, "level", logging.root.level)
    _feed(monkeypatch, ["x", "d", "e", "s", "   ", "Nobody"])

    assert main([]) == 0
    captured = capsys.readouterr()
    assert "Invalid option! Try again." in captured.out
    assert "There is no room to the left!" in captured.out
    assert captured.err == ""
