"""Module-level constructors, combinators and process setup."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from errtree.attrs import Configurator, extend_with
from errtree.config import Settings, get_settings, install_settings
from errtree.log import Log
from errtree.conversion import from_exception
from errtree.emitter import fatal
from errtree.logging_config import configure_logging
from errtree.tree import Error

if TYPE_CHECKING:
    from errtree.sinks import Sink

__all__ = [
    "agg_err",
    "agg_err_with",
    "combine",
    "err",
    "err_with",
    "fatal",
    "setup",
    "stack_context",
    "stack_context_with",
    "wrap",
    "wrap_with",
]


def err(message: str) -> Error:
    """Create a new error. To inherit attributes from a context chain, see `Log.err`."""
    return Error(message)


def err_with(message: str, configurator: Optional[Configurator] = None) -> Error:
    """Create a new error with attributes."""
    return Error(message, attrs=extend_with({}, configurator))


def wrap(inner: BaseException, message: str) -> Error:
    """Add a layer of context onto an error (or any exception)."""
    return from_exception(inner).wrap(message)


def wrap_with(inner: BaseException, message: str, configurator: Optional[Configurator] = None) -> Error:
    """Add a layer of context with attributes onto an error (or any exception)."""
    return from_exception(inner).wrap(message, configurator)


def stack_context(inner: BaseException, log: Log, message: str) -> Error:
    """Add a layer of context plus `log`'s attributes onto an error."""
    return from_exception(inner).stack(log, message)


def stack_context_with(
    inner: BaseException,
    log: Log,
    message: str,
    configurator: Optional[Configurator] = None,
) -> Error:
    return from_exception(inner).stack(log, message, configurator)


def agg_err(message: str, errors: Iterable[Error]) -> Error:
    """Create an error from multiple errors, e.g. from a batch of independent tasks."""
    return Error(message, causes=errors)


def agg_err_with(
    message: str,
    errors: Iterable[Error],
    configurator: Optional[Configurator] = None,
) -> Error:
    """Create an error from multiple errors, attaching attributes."""
    return Error(message, attrs=extend_with({}, configurator), causes=errors)


def combine(
    primary: Optional[BaseException],
    secondary: Optional[BaseException],
) -> Optional[Error]:
    """
    Merge the outcomes of an operation and its follow-up (e.g. cleanup).

    Rules
    -----
    - both failed: the secondary becomes incidental on the primary
    - only the secondary failed: it is the result
    - only the primary failed: it is the result
    - neither failed: None

    Usage example
    -------------
        failure = combine(run_job(), cleanup())
        if failure is not None:
            raise failure
    """
    if primary is None:
        return None if secondary is None else from_exception(secondary)
    result = from_exception(primary)
    if secondary is not None:
        result.also(from_exception(secondary))
    return result


def setup(settings: Optional[Settings] = None, sink: Optional["Sink"] = None) -> Log:
    """
    Install process-wide settings, configure diagnostics and return the root Log.

    Usage example
    -------------
        log = errtree.setup()
        log.info("Starting")
    """
    if settings is None:
        settings = get_settings()
        configure_logging(settings.diagnostics_level, settings.diagnostics_json)
    else:
        configure_logging(settings.diagnostics_level, settings.diagnostics_json)
        settings = install_settings(settings)
    if sink is not None:
        return Log.new_root(settings.level, sink=sink)
    return Log.from_settings(settings)
