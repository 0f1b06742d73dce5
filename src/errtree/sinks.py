"""Output sinks that rendered log messages and error trees are written to."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, Optional, Protocol, TextIO

from rich.console import Console
from rich.text import Text

from errtree.logging_config import get_logger

if TYPE_CHECKING:
    from errtree.config import Settings


class Sink(Protocol):
    """Protocol for consumers of rendered text."""

    @property
    def width(self) -> Optional[int]: ...
    def write(self, text: str, style: Optional[str] = None) -> None: ...
    def flush(self) -> None: ...


class StreamSink:
    """
    Plain text to a stream. Emphasis is dropped.

    Usage example
    -------------
        buf = io.StringIO()
        log = Log.new_root(Level.INFO, sink=StreamSink(buf, width=100))
    """

    def __init__(self, stream: Optional[TextIO] = None, width: Optional[int] = None) -> None:
        self._stream = stream
        self._width = width

    @property
    def stream(self) -> TextIO:
        # Resolved late so pytest's capsys and redirected stderr are honoured.
        return self._stream if self._stream is not None else sys.stderr

    @property
    def width(self) -> Optional[int]:
        return self._width

    def write(self, text: str, style: Optional[str] = None) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()


class ConsoleSink:
    """Styled text to a rich Console (stderr by default)."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console if console is not None else Console(stderr=True)

    @property
    def width(self) -> Optional[int]:
        return self.console.width

    def write(self, text: str, style: Optional[str] = None) -> None:
        self.console.print(
            Text(text, style=style or ""),
            end="",
            soft_wrap=True,
            highlight=False,
        )

    def flush(self) -> None:
        self.console.file.flush()


class StructlogSink:
    """
    Forward each written block to a structlog logger as an ``error_tree`` event.

    For applications that already route all output through structlog. Text is
    passed through unchanged; the style becomes the ``style`` field.
    """

    def __init__(self, logger: Any = None, width: Optional[int] = None) -> None:
        self._logger = logger if logger is not None else get_logger("errtree.output")
        self._width = width

    @property
    def width(self) -> Optional[int]:
        return self._width

    def write(self, text: str, style: Optional[str] = None) -> None:
        self._logger.info("error_tree", text=text, style=style)

    def flush(self) -> None:
        return None


def default_sink(settings: "Settings") -> Sink:
    """Choose the sink for settings: styled console on a terminal, plain stream otherwise."""
    color = settings.color
    if color is None:
        color = sys.stderr.isatty()
    if color:
        return ConsoleSink(Console(stderr=True, force_terminal=True, width=settings.line_width))
    return StreamSink(width=settings.line_width)
