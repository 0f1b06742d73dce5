"""
Bridges from ordinary Python exceptions and missing values to `Error` trees.

Usage example
-------------
    with context("Failed to load config", ea(path=path)):
        data = path.read_text()

    with log_failure(log, Level.WARN, "Cleanup failed"):
        tmp.unlink()

    user = require(users.get(uid), "Unknown user", ea(uid=uid))
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional, TypeVar

from errtree.attrs import Configurator, extend_with
from errtree.levels import Level
from errtree.tree import Error

if TYPE_CHECKING:
    from errtree.log import Log

T = TypeVar("T")


def _linked(exc: BaseException) -> list[BaseException]:
    """Exceptions that become causes of `exc`: group members, then ``__cause__``."""
    linked: list[BaseException] = []
    if isinstance(exc, BaseExceptionGroup):
        linked.extend(exc.exceptions)
    if exc.__cause__ is not None:
        linked.append(exc.__cause__)
    return linked


def _node(exc: BaseException, causes: list[Error]) -> Error:
    if isinstance(exc, BaseExceptionGroup):
        message = exc.message or type(exc).__name__
    else:
        message = str(exc) or type(exc).__name__
    return Error(message, attrs={"type": type(exc).__name__}, causes=causes)


def from_exception(exc: BaseException) -> Error:
    """
    Convert any exception into an `Error`.

    An `Error` is returned unchanged. Other exceptions become a node whose
    message is ``str(exc)`` (the type name when that is empty) with a ``type``
    attribute. An explicit ``__cause__`` becomes the node's cause, and an
    exception group becomes an aggregate of its members.

    Conversion uses an explicit work stack, so long ``raise ... from`` chains
    convert without recursion. A link back to an exception that is still being
    converted (a ``__cause__`` cycle) is dropped.
    """
    if isinstance(exc, Error):
        return exc
    converted: dict[int, Error] = {}
    in_progress: set[int] = set()
    # (exception, whether its linked exceptions have been converted)
    stack: list[tuple[BaseException, bool]] = [(exc, False)]
    while stack:
        current, expanded = stack.pop()
        key = id(current)
        if expanded:
            causes = [converted[id(link)] for link in _linked(current) if id(link) in converted]
            converted[key] = _node(current, causes)
            in_progress.discard(key)
            continue
        if key in converted or key in in_progress:
            continue
        if isinstance(current, Error):
            converted[key] = current
            continue
        in_progress.add(key)
        stack.append((current, True))
        stack.extend((link, False) for link in reversed(_linked(current)))
    return converted[id(exc)]


def wrap_exception(
    exc: BaseException,
    message: str,
    configurator: Optional[Configurator] = None,
) -> Error:
    """Add a layer of context onto any exception."""
    return Error(message, attrs=extend_with({}, configurator), causes=(from_exception(exc),))


def stack_exception(
    exc: BaseException,
    log: "Log",
    message: str,
    configurator: Optional[Configurator] = None,
) -> Error:
    """Add a layer of context and `log`'s attributes onto any exception."""
    return Error(
        message,
        attrs=extend_with({}, configurator),
        context=(log,),
        causes=(from_exception(exc),),
    )


@contextmanager
def context(message: str, configurator: Optional[Configurator] = None) -> Iterator[None]:
    """
    Re-raise any exception from the block wrapped in a new `Error` layer.

    Also usable as a decorator.
    """
    try:
        yield
    except Exception as exc:
        raise wrap_exception(exc, message, configurator) from exc


@contextmanager
def stack_context_of(
    log: "Log",
    message: str,
    configurator: Optional[Configurator] = None,
) -> Iterator[None]:
    """Like `context`, also capturing `log` on the new layer."""
    try:
        yield
    except Exception as exc:
        raise stack_exception(exc, log, message, configurator) from exc


@contextmanager
def log_failure(
    log: "Log",
    level: "Level | str",
    message: str,
    configurator: Optional[Configurator] = None,
) -> Iterator[None]:
    """
    Consume any exception from the block by logging it with an added message.

    For failures that should be reported but must not stop the caller, such as
    best-effort cleanup.
    """
    try:
        yield
    except Exception as exc:
        log.log_error(level, wrap_exception(exc, message, configurator))


def require(value: Optional[T], message: str, configurator: Optional[Configurator] = None) -> T:
    """Return `value`, or raise a leaf `Error` when it is None."""
    if value is None:
        raise Error(message, attrs=extend_with({}, configurator))
    return value


def require_in(
    log: "Log",
    value: Optional[T],
    message: str,
    configurator: Optional[Configurator] = None,
) -> T:
    """Return `value`, or raise an `Error` carrying `log`'s context when it is None."""
    if value is None:
        raise log.err_with(message, configurator)
    return value
