"""Writing rendered errors to sinks, including the fatal exit path."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import TYPE_CHECKING, NoReturn, Optional

from rich.cells import cell_len

from errtree.config import get_settings
from errtree.levels import FATAL_STYLE, FlagStyle
from errtree.logging_config import get_logger
from errtree.render import build_render_tree, render, resolve_width, wrap
from errtree.sinks import Sink, default_sink

if TYPE_CHECKING:
    from errtree.tree import Error

logger = get_logger(__name__)

FATAL_FOOTER = "Exited due to above error"


def _timestamp() -> str:
    return datetime.now().astimezone().isoformat()


def resolve_sink(sink: Optional[Sink]) -> Sink:
    """Return `sink`, or the default sink for the installed settings."""
    return sink if sink is not None else default_sink(get_settings())


def emit(
    sink: Optional[Sink],
    style: FlagStyle,
    error: "Error",
    *,
    emphasize_title: bool = False,
) -> None:
    """
    Write one log message: a header line, then the rendered body.

    The header is ``<timestamp> <LABEL>: <message>`` with continuation lines
    aligned under the message. The body is the error's attributes, context and
    sub-errors, indented one level.
    """
    settings = get_settings()
    sink = resolve_sink(sink)
    width = resolve_width(sink.width)

    tree = build_render_tree(error)
    stamp = f"{_timestamp()} " if settings.timestamps else ""
    prefix = f"{stamp}{style.label}: "
    header = "".join(
        line + "\n" for line in wrap(tree.title, prefix, " " * cell_len(prefix), width)
    )
    body = "".join(render(child, width=width, indent=1) for child in tree.children)

    if stamp:
        sink.write(stamp, style.body_style)
    sink.write(style.label, style.label_style)
    sink.write(header[len(stamp) + len(style.label):], style.label_style if emphasize_title else None)
    if body:
        sink.write(body, style.body_style)


def flush_quietly(sink: Sink) -> None:
    """Flush `sink`, reporting (not raising) failures."""
    try:
        sink.flush()
    except (OSError, ValueError) as exc:
        logger.warning("sink_flush_failed", sink=type(sink).__name__, error=repr(exc))


def fatal(error: "Error", sink: Optional[Sink] = None) -> NoReturn:
    """
    Log a fatal error and terminate the process with status 1.

    The full tree is written before exiting so the last thing a user sees is
    the complete picture, not a truncated message.
    """
    sink = resolve_sink(sink)
    emit(sink, FATAL_STYLE, error, emphasize_title=True)
    sink.write(FATAL_FOOTER + "\n", FATAL_STYLE.label_style)
    flush_quietly(sink)
    logger.info("fatal_exit", message=error.message, status=1)
    sys.exit(1)
