import logging
from typing import Callable, Optional

from .clues import ClueNode, collect_clues, contains_clue, insert_clue
from .models import Command, ExplorationState
from .mansion import Room

logger = logging.getLogger(__name__)

COMMAND_KEYS = {
    "e": Command.LEFT,
    "d": Command.RIGHT,
    "s": Command.QUIT,
}
COMMAND_LABELS = {
    Command.LEFT: "e",
    Command.RIGHT: "d",
    Command.QUIT: "s",
}


class ExplorationError(ValueError):
    pass


class InvalidCommand(ExplorationError):
    pass


class NoRoomThatWay(ExplorationError):
    pass


def parse_command(raw: str) -> Command:
    """Map a line of player input to a Command.

    Only the first non-whitespace character counts, case-insensitively.
    """
    stripped = (raw or "").strip()
    command = COMMAND_KEYS.get(stripped[:1].lower())
    if command is None:
        raise InvalidCommand("Invalid option! Try again.")
    return command


class ExplorationController:
    """Walks the mansion one command at a time, collecting clues on entry.

    With ``auto_stop_at_leaves`` (the default) entering a room without
    children finishes the exploration. Otherwise only an explicit quit does,
    and dead ends are merely reported.
    """

    def __init__(
        self,
        root: Room,
        auto_stop_at_leaves: bool = True,
        clear_screen: Optional[Callable[[], None]] = None,
    ):
        if root is None:
            raise ValueError("Cannot explore a mansion without an entrance")
        self.root = root
        self.auto_stop_at_leaves = auto_stop_at_leaves
        self.clear_screen = clear_screen
        self.clue_root: Optional[ClueNode] = None
        self.current: Room = root
        self.state = ExplorationState(current_room=root.name)
        self._notice: Optional[str] = None
        self._enter(root)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _enter(self, room: Room) -> bool:
        """Move into `room` and collect its clue. Returns True if the clue is new."""
        self.current = room
        self.state.current_room = room.name
        self.state.visited_rooms.append(room.name)
        logger.info("Entered %s", room.name)

        new_clue = False
        if room.has_clue:
            new_clue = not contains_clue(self.clue_root, room.clue)
            self.clue_root = insert_clue(self.clue_root, room.clue)
            logger.info("Collected clue in %s: %r (new=%s)", room.name, room.clue, new_clue)

        if self.auto_stop_at_leaves and room.is_dead_end:
            self._finish("dead_end")
        return new_clue

    def _finish(self, reason: str):
        self.state.status = "finished"
        self.state.finish_reason = reason
        logger.info("Exploration finished in %s (%s)", self.current.name, reason)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def finished(self) -> bool:
        return self.state.status == "finished"

    @property
    def clues(self) -> list[str]:
        return collect_clues(self.clue_root)

    def available_commands(self) -> list[Command]:
        commands = []
        if self.current.left is not None:
            commands.append(Command.LEFT)
        if self.current.right is not None:
            commands.append(Command.RIGHT)
        commands.append(Command.QUIT)
        return commands

    def process_command(self, raw: str) -> dict:
        if self.finished:
            raise ExplorationError("The exploration is already over")

        command = parse_command(raw)
        result: dict = {"command": command.value, "from_room": self.current.name}

        if command == Command.QUIT:
            self._finish("quit")
            result.update({"room": self.current.name, "finished": True})
            return result

        target = self.current.left if command == Command.LEFT else self.current.right
        if target is None:
            side = "left" if command == Command.LEFT else "right"
            raise NoRoomThatWay(f"There is no room to the {side}!")

        self.state.moves += 1
        new_clue = self._enter(target)
        result.update(
            {
                "room": target.name,
                "clue": target.clue or None,
                "new_clue": new_clue,
                "finished": self.finished,
            }
        )
        return result

    def describe_room(self) -> str:
        room = self.current
        lines = [
            "=" * 46,
            f"You are in: {room.name}",
            "=" * 46,
        ]
        if room.has_clue:
            lines.append(f'Clue found: "{room.clue}"')
        else:
            lines.append("No clue here.")

        if self.finished:
            if self.state.finish_reason == "dead_end":
                lines.append("\nDead end: no more rooms to explore from here.")
            return "\n".join(lines)

        if room.is_dead_end:
            lines.append("\nThis room has no further doors.")
        lines.append("\nChoose your path:")
        for command in self.available_commands():
            key = COMMAND_LABELS[command]
            if command == Command.LEFT:
                lines.append(f" ({key}) Go to {room.left.name}")
            elif command == Command.RIGHT:
                lines.append(f" ({key}) Go to {room.right.name}")
            else:
                lines.append(f" ({key}) Stop exploring")
        return "\n".join(lines)

    def run(self, io) -> ExplorationState:
        """Drive the exploration against a console collaborator until finished."""
        while True:
            if self.clear_screen:
                self.clear_screen()
            io.write(self.describe_room())
            if self._notice:
                io.write(self._notice)
                self._notice = None
            if self.finished:
                break

            raw = io.read_command()
            if raw is None:
                logger.info("Input closed, leaving the mansion")
                self._finish("quit")
                break

            try:
                result = self.process_command(raw)
            except ExplorationError as exc:
                logger.debug("Rejected command %r in %s: %s", raw, self.current.name, exc)
                self._notice = str(exc)
                continue

            if result["command"] == Command.QUIT.value:
                io.write("\nLeaving the mansion...")
                break
        return self.state
