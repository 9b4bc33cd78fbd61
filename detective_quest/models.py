"""Pydantic models for the mansion layout, exploration state and reports."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Command(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"


class Verdict(str, Enum):
    UNSUPPORTED = "unsupported"
    WEAK = "weak"
    CONFIRMED = "confirmed"


class RoomSpec(BaseModel):
    name: str
    clue: str = ""
    left: Optional[str] = None  # child room name
    right: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Room name must not be blank")
        return value


class ExplorationState(BaseModel):
    status: str = "exploring"  # "exploring" | "finished"
    current_room: str
    visited_rooms: list[str] = Field(default_factory=list)
    moves: int = 0
    finish_reason: Optional[str] = None  # "quit" | "dead_end"


class AccusationResult(BaseModel):
    suspect: str
    tally: int
    verdict: Verdict
    supporting_clues: list[str] = Field(default_factory=list)


class SessionReport(BaseModel):
    clues: list[str] = Field(default_factory=list)
    associations: list[tuple[str, str]] = Field(default_factory=list)
    accusation: Optional[AccusationResult] = None
