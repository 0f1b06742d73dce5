"""
The context chain ("Log").

A `Log` is one immutable frame in a chain that points toward its root. Each
frame stores only the attributes added when it was forked; the full set is
assembled at render time by walking the chain, which is what lets the renderer
print a shared ancestor's attributes once instead of at every level.

Frames are shared by reference between child frames and the errors that
captured them, and compare by identity. They are never mutated after
construction, so they can be read from any thread without locking.

Usage example
-------------
    log = errtree.setup()
    request_log = log.fork(ea(request_id=rid))
    request_log.info("Handling request")
    raise request_log.err("Request failed")
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping, Optional

from errtree.attrs import Configurator, extend_with
from errtree.emitter import emit
from errtree.levels import Level
from errtree.tree import Error

if TYPE_CHECKING:
    from errtree.config import Settings
    from errtree.sinks import Sink

_EMPTY: Mapping[str, str] = MappingProxyType({})


class Log:
    """A frame of logging context that also stamps new errors with that context."""

    __slots__ = ("_parent", "_attrs", "_min_level", "_sink")

    def __init__(
        self,
        *,
        parent: Optional["Log"] = None,
        attrs: Optional[Mapping[str, str]] = None,
        min_level: Optional[Level] = None,
        sink: Optional["Sink"] = None,
    ) -> None:
        self._parent = parent
        self._attrs: Mapping[str, str] = MappingProxyType(dict(attrs)) if attrs else _EMPTY
        self._min_level = min_level
        self._sink = sink

    # -- construction -----------------------------------------------------

    @classmethod
    def new_root(cls, min_level: "Level | str", sink: Optional["Sink"] = None) -> "Log":
        """Create a chain that emits messages at `min_level` and above."""
        return cls(min_level=Level.parse(min_level), sink=sink)

    @classmethod
    def new(cls, sink: Optional["Sink"] = None) -> "Log":
        """Create a non-rooted chain: never emits, still collects attributes for errors."""
        return cls(sink=sink)

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None) -> "Log":
        """Create a rooted chain at the configured level with the configured sink."""
        from errtree.config import get_settings
        from errtree.sinks import default_sink

        settings = settings if settings is not None else get_settings()
        return cls.new_root(settings.level, sink=default_sink(settings))

    def fork(self, configurator: Optional[Configurator] = None) -> "Log":
        """
        Create a child frame holding the attributes `configurator` inserts.

        Use like ``child = log.fork(ea(request_id=rid))``. The parent is untouched.
        """
        return Log(
            parent=self,
            attrs=extend_with({}, configurator),
            min_level=self._min_level,
            sink=self._sink,
        )

    def fork_with_min_level(self, level: "Level | str", configurator: Optional[Configurator] = None) -> "Log":
        """Fork, raising (never lowering) the minimum level for the new branch."""
        level = Level.parse(level)
        min_level = None if self._min_level is None else max(self._min_level, level)
        return Log(
            parent=self,
            attrs=extend_with({}, configurator),
            min_level=min_level,
            sink=self._sink,
        )

    # -- inspection -------------------------------------------------------

    @property
    def parent(self) -> Optional["Log"]:
        return self._parent

    @property
    def attrs(self) -> Mapping[str, str]:
        """Attributes added by this frame only."""
        return self._attrs

    @property
    def min_level(self) -> Optional[Level]:
        return self._min_level

    @property
    def sink(self) -> Optional["Sink"]:
        return self._sink

    def frames(self) -> Iterator["Log"]:
        """Iterate from this frame to the root."""
        frame: Optional[Log] = self
        while frame is not None:
            yield frame
            frame = frame._parent

    def effective_attrs(self) -> dict[str, str]:
        """All attributes visible from this frame; nearer frames win."""
        out: dict[str, str] = {}
        for frame in self.frames():
            for key, value in frame._attrs.items():
                out.setdefault(key, value)
        return out

    def should_emit(self, level: "Level | str") -> bool:
        if self._min_level is None:
            return False
        return Level.parse(level) >= self._min_level

    # -- logging ----------------------------------------------------------

    def log(self, level: "Level | str", message: str, configurator: Optional[Configurator] = None) -> None:
        """
        Log a message with this frame's context.

        When `level` is filtered out nothing is evaluated, including
        `configurator`.
        """
        level = Level.parse(level)
        if not self.should_emit(level):
            return
        emit(self._sink, level.style(), self.err_with(message, configurator))

    def log_with(self, level: "Level | str", message: str, configurator: Configurator) -> None:
        self.log(level, message, configurator)

    def debug(self, message: str, configurator: Optional[Configurator] = None) -> None:
        self.log(Level.DEBUG, message, configurator)

    def info(self, message: str, configurator: Optional[Configurator] = None) -> None:
        self.log(Level.INFO, message, configurator)

    def warn(self, message: str, configurator: Optional[Configurator] = None) -> None:
        self.log(Level.WARN, message, configurator)

    def error(self, message: str, configurator: Optional[Configurator] = None) -> None:
        self.log(Level.ERROR, message, configurator)

    def log_error(self, level: "Level | str", error: Error) -> None:
        """Log an existing error, adding this frame to its context."""
        level = Level.parse(level)
        if not self.should_emit(level):
            return
        emit(self._sink, level.style(), error.with_context(self))

    # -- error construction -----------------------------------------------

    def err(self, message: str) -> Error:
        """Create a new error carrying this frame's context."""
        return Error(message, context=(self,))

    def err_with(self, message: str, configurator: Optional[Configurator] = None) -> Error:
        """Create a new error carrying this frame's context and extra attributes."""
        return Error(message, attrs=extend_with({}, configurator), context=(self,))

    def agg_err(self, message: str, causes: Iterable[Error]) -> Error:
        """Create an error from multiple errors, carrying this frame's context."""
        return Error(message, context=(self,), causes=causes)

    def agg_err_with(
        self,
        message: str,
        causes: Iterable[Error],
        configurator: Optional[Configurator] = None,
    ) -> Error:
        return Error(message, attrs=extend_with({}, configurator), context=(self,), causes=causes)

    def __repr__(self) -> str:
        level = self._min_level.label if self._min_level is not None else None
        return f"Log(attrs={dict(self._attrs)!r}, min_level={level!r}, depth={sum(1 for _ in self.frames())})"
