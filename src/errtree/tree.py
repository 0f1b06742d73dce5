"""
The error tree value.

An `Error` is a message plus attributes, the context chain snapshots that were
current where it was built, the errors that caused it and the errors that
happened incidentally while reacting to it. Everything except `incidental` is
fixed at construction; adding context means building a new node that wraps
the old one as its only cause.

`Error` subclasses `Exception` so it can travel through ordinary ``raise`` /
``except`` control flow, but it is designed for human eyes only: `str()` gives
a one-line summary and `render()` gives the full indented tree.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from errtree.attrs import Configurator, extend_with

if TYPE_CHECKING:
    from errtree.log import Log


class Error(Exception):
    """A structured error intended exclusively for human consumption."""

    def __init__(
        self,
        message: str,
        *,
        attrs: Optional[Mapping[str, str]] = None,
        context: Iterable["Log"] = (),
        causes: Iterable["Error"] = (),
        incidental: Iterable["Error"] = (),
    ) -> None:
        message = str(message)
        if not message:
            raise ValueError("Error message must be non-empty")
        super().__init__(message)
        self._message = message
        self._attrs: Mapping[str, str] = MappingProxyType(dict(attrs or {}))
        self._context: tuple["Log", ...] = tuple(context)
        self._causes: tuple[Error, ...] = tuple(causes)
        self._incidental: list[Error] = list(incidental)

    @property
    def message(self) -> str:
        return self._message

    @property
    def attrs(self) -> Mapping[str, str]:
        return self._attrs

    @property
    def context(self) -> tuple["Log", ...]:
        """Context chain snapshots captured for this node."""
        return self._context

    @property
    def causes(self) -> tuple["Error", ...]:
        return self._causes

    @property
    def incidental(self) -> tuple["Error", ...]:
        """Errors that occurred while handling this one (read-only view)."""
        return tuple(self._incidental)

    def also(self, incidental: "Error") -> "Error":
        """
        Attach an error that occurred while handling this one.

        The message and causes are left alone. Returns `self` so calls chain:
        ``raise primary.also(cleanup_error)``.
        """
        self._incidental.append(incidental)
        return self

    def wrap(self, message: str, configurator: Optional[Configurator] = None) -> "Error":
        """Return a new error with this one as its sole cause."""
        return Error(message, attrs=extend_with({}, configurator), causes=(self,))

    def stack(
        self,
        log: "Log",
        message: str,
        configurator: Optional[Configurator] = None,
    ) -> "Error":
        """Like `wrap`, but also capture `log` as the new node's context."""
        return Error(message, attrs=extend_with({}, configurator), context=(log,), causes=(self,))

    def with_context(self, log: "Log") -> "Error":
        """Return a copy of this node with `log` appended to its context snapshots."""
        return Error(
            self._message,
            attrs=self._attrs,
            context=(*self._context, log),
            causes=self._causes,
            incidental=self._incidental,
        )

    def render(self, width: Optional[int] = None) -> str:
        """Render the full tree as indented, wrapped text."""
        from errtree.render import render_error

        return render_error(self, width=width)

    def __str__(self) -> str:
        parts = [self._message]
        for key, value in self._attrs.items():
            parts.append(f", {key}={value}")
        if self._causes:
            parts.append(", causes [")
            parts.extend(f"{cause} " for cause in self._causes)
            parts.append("]")
        if self._incidental:
            parts.append(", incidental [")
            parts.extend(f"{incident} " for incident in self._incidental)
            parts.append("]")
        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"Error({self._message!r}, attrs={dict(self._attrs)!r}, "
            f"causes={len(self._causes)}, incidental={len(self._incidental)})"
        )

