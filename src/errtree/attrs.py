"""Attribute maps and the configurator callables that fill them."""

from __future__ import annotations

import pprint
from typing import Any, Callable, Mapping, Optional

# Plain dict while a configurator fills it; stored read-only afterwards.
Attrs = dict[str, str]

# Receives a mutable map and inserts zero or more key/value pairs.
Configurator = Callable[[Attrs], None]


def new_attrs() -> Attrs:
    """Return an empty attribute map."""
    return {}


def extend_with(base: Mapping[str, str], configurator: Optional[Configurator]) -> Attrs:
    """
    Copy `base` and let `configurator` insert into the copy.

    The base map is never touched. Keys written by the configurator replace
    keys already present (last write wins).
    """
    out: Attrs = dict(base)
    if configurator is not None:
        configurator(out)
    return out


def ea(**pairs: Any) -> Configurator:
    """
    Build a configurator from keyword arguments.

    Values are converted with ``str()`` when the configurator runs, so an
    expensive ``__str__`` is only paid for when the attributes are used.

    Usage example
    -------------
        log = log.fork(ea(request_id=rid, attempt=3))
    """

    def _configure(attrs: Attrs) -> None:
        for key, value in pairs.items():
            attrs[key] = str(value)

    return _configure


def dbg_str(value: Any) -> str:
    """Return the ``repr`` of a value for use as an attribute."""
    return repr(value)


def pretty_dbg_str(value: Any) -> str:
    """Return a multi-line pretty-printed representation of a value."""
    return pprint.pformat(value)
