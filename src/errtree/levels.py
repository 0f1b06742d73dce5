"""Log levels and the emphasis each one is rendered with."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Protocol


@dataclass(frozen=True)
class FlagStyle:
    """
    How a tagged message is presented.

    ``label_style`` and ``body_style`` are rich style strings; sinks that
    cannot render emphasis ignore them.
    """
    label: str
    label_style: Optional[str] = None
    body_style: Optional[str] = None


class Styled(Protocol):
    """Anything that can tell a sink how to present its messages."""

    def style(self) -> FlagStyle: ...


class Level(IntEnum):
    """Linear scale for filtering output, most verbose first."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @property
    def label(self) -> str:
        return self.name

    def style(self) -> FlagStyle:
        return _LEVEL_STYLES[self]

    @classmethod
    def parse(cls, value: "str | int | Level") -> "Level":
        """Parse a level name (case-insensitive, WARNING accepted) or priority."""
        if isinstance(value, Level):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid level priority {value!r}") from None
        name = value.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            valid = ", ".join(level.name for level in cls)
            raise ValueError(f"Invalid level '{value}'. Must be one of: {valid}") from None


_LEVEL_STYLES: dict[Level, FlagStyle] = {
    Level.DEBUG: FlagStyle(label="DEBUG", label_style="bright_black", body_style="bright_black"),
    Level.INFO: FlagStyle(label="INFO", label_style=None, body_style=None),
    Level.WARN: FlagStyle(label="WARN", label_style="yellow", body_style=None),
    Level.ERROR: FlagStyle(label="ERROR", label_style="red", body_style=None),
}

FATAL_STYLE = FlagStyle(label="FATAL", label_style="bold red", body_style="red")
