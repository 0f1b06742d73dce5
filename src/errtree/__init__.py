"""errtree - structured errors and persistent logging context for human eyes."""

from errtree.attrs import Attrs, Configurator, dbg_str, ea, extend_with, new_attrs, pretty_dbg_str
from errtree.config import Settings, get_settings, install_settings
from errtree.log import Log
from errtree.conversion import (
    context,
    from_exception,
    log_failure,
    require,
    require_in,
    stack_context_of,
    stack_exception,
    wrap_exception,
)
from errtree.entry import (
    agg_err,
    agg_err_with,
    combine,
    err,
    err_with,
    fatal,
    setup,
    stack_context,
    stack_context_with,
    wrap,
    wrap_with,
)
from errtree.errors import ConfigurationError, ErrtreeError
from errtree.levels import FATAL_STYLE, FlagStyle, Level, Styled
from errtree.render import Branch, KeyValueLeaf, build_render_tree, render, render_error
from errtree.sinks import ConsoleSink, Sink, StreamSink, StructlogSink, default_sink
from errtree.tree import Error

DEBUG = Level.DEBUG
INFO = Level.INFO
WARN = Level.WARN
ERROR = Level.ERROR

__all__ = [
    "Attrs",
    "Branch",
    "ConfigurationError",
    "Configurator",
    "ConsoleSink",
    "DEBUG",
    "ERROR",
    "Error",
    "ErrtreeError",
    "FATAL_STYLE",
    "FlagStyle",
    "INFO",
    "KeyValueLeaf",
    "Level",
    "Log",
    "Settings",
    "Sink",
    "StreamSink",
    "StructlogSink",
    "Styled",
    "WARN",
    "agg_err",
    "agg_err_with",
    "build_render_tree",
    "combine",
    "context",
    "dbg_str",
    "default_sink",
    "ea",
    "err",
    "err_with",
    "extend_with",
    "fatal",
    "from_exception",
    "get_settings",
    "install_settings",
    "log_failure",
    "new_attrs",
    "pretty_dbg_str",
    "render",
    "render_error",
    "require",
    "require_in",
    "setup",
    "stack_context",
    "stack_context_of",
    "stack_context_with",
    "stack_exception",
    "wrap",
    "wrap_exception",
    "wrap_with",
]
