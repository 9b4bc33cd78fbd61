"""
Mansion - Fixed Binary Tree of Rooms

Layout (built once at startup, never rewired afterwards):

                 [Hall of Entrance]
                   /            \\
             [Library]        [Kitchen]
              /     \\              \\
         [Study]  [Garden]        [Attic]

Each room holds at most one clue. `e` walks left, `d` walks right.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Iterator, Optional

from .models import RoomSpec

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Room:
    name: str
    clue: str = ""
    left: Optional["Room"] = None
    right: Optional["Room"] = None

    @property
    def has_clue(self) -> bool:
        return bool(self.clue)

    @property
    def is_dead_end(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        return f"Room({self.name!r})"


# ── Mansion Data ────────────────────────────────────────────

# Root first. Children are referenced by name.
MANSION_LAYOUT = [
    RoomSpec(
        name="Hall of Entrance",
        clue="mud footprints by the front door",
        left="Library",
        right="Kitchen",
    ),
    RoomSpec(
        name="Library",
        clue="torn diary page",
        left="Study",
        right="Garden",
    ),
    RoomSpec(
        name="Kitchen",
        clue="broken glass with lipstick mark",
        right="Attic",
    ),
    RoomSpec(name="Study", clue="sealed envelope with red wax"),
    RoomSpec(name="Garden", clue="old key among the flowers"),
    RoomSpec(name="Attic", clue="torn portrait of an unknown woman"),
]


# ── Builder ─────────────────────────────────────────────────


def create_room(name: str, clue: Optional[str] = "") -> Room:
    return Room(name=name, clue=clue or "")


def build_mansion(layout: list[RoomSpec] = MANSION_LAYOUT) -> Room:
    """Create every room once and wire the children.

    The first spec is the root. Raises ValueError on duplicate names,
    dangling child names, rooms with two parents or rooms unreachable
    from the root.
    """
    if not layout:
        raise ValueError("Mansion layout is empty")

    rooms: dict[str, Room] = {}
    for spec in layout:
        if spec.name in rooms:
            raise ValueError(f"Duplicate room name: {spec.name}")
        rooms[spec.name] = create_room(spec.name, spec.clue)

    parent_of: dict[str, str] = {}
    for spec in layout:
        room = rooms[spec.name]
        for side, child_name in (("left", spec.left), ("right", spec.right)):
            if child_name is None:
                continue
            child = rooms.get(child_name)
            if child is None:
                raise ValueError(f"Room {spec.name} points {side} to unknown room {child_name}")
            if child_name in parent_of or child_name == layout[0].name:
                raise ValueError(f"Room {child_name} is reachable from more than one door")
            parent_of[child_name] = spec.name
            setattr(room, side, child)

    root = rooms[layout[0].name]
    reached = {room.name for room in iter_rooms(root)}
    orphans = [name for name in rooms if name not in reached]
    if orphans:
        raise ValueError(f"Rooms not reachable from {root.name}: {', '.join(orphans)}")

    logger.info("Mansion built with %d rooms, entrance %s", len(rooms), root.name)
    return root


def release_topology(root: Optional[Room]) -> int:
    """Post-order walk detaching every room. Returns how many were released."""
    if root is None:
        return 0
    released = release_topology(root.left) + release_topology(root.right)
    root.left = root.right = None
    return released + 1


# ── Queries ─────────────────────────────────────────────────


def iter_rooms(root: Optional[Room]) -> Iterator[Room]:
    stack = [root] if root else []
    while stack:
        room = stack.pop()
        yield room
        if room.right:
            stack.append(room.right)
        if room.left:
            stack.append(room.left)


def find_room(root: Optional[Room], name: str) -> Optional[Room]:
    for room in iter_rooms(root):
        if room.name == name:
            return room
    return None


def validate_mansion(root: Optional[Room]) -> list[str]:
    errors = []
    seen: set[int] = set()
    stack = [root] if root else []
    while stack:
        room = stack.pop()
        if id(room) in seen:
            errors.append(f"Room {room.name} is reachable by more than one path")
            continue
        seen.add(id(room))
        for child in (room.left, room.right):
            if child is not None:
                stack.append(child)

    for e in errors:
        logger.warning("Mansion invariant broken: %s", e)
    return errors


# ── Display ─────────────────────────────────────────────────


def render_mansion(root: Optional[Room]) -> str:
    if root is None:
        return "(empty mansion)"
    lines = [_room_label(root)]
    _render_children(root, "", lines)
    return "\n".join(lines)


def _room_label(room: Room) -> str:
    if room.clue:
        return f"[{room.name}] clue: {room.clue}"
    return f"[{room.name}]"


def _render_children(room: Room, prefix: str, lines: list[str]):
    children = [("e", room.left), ("d", room.right)]
    children = [(key, child) for key, child in children if child is not None]
    for i, (key, child) in enumerate(children):
        last = i == len(children) - 1
        lines.append(f"{prefix}{'`-- ' if last else '|-- '}({key}) {_room_label(child)}")
        _render_children(child, prefix + ("    " if last else "|   "), lines)


# ── Main ────────────────────────────────────────────────────

if __name__ == "__main__":
    mansion = build_mansion()
    print("=== Mansion ===")
    print(render_mansion(mansion))
    problems = validate_mansion(mansion)
    if problems:
        for p in problems:
            print(f"  x {p}")
        sys.exit(1)
    print("\n=== Validation: ALL OK ===")
