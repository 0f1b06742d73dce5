"""Tests for the Error value and the module-level constructors."""

import pytest

from errtree import agg_err, agg_err_with, combine, ea, err, err_with, wrap, wrap_with
from errtree.log import Log
from errtree.tree import Error


class TestErrorConstruction:
    """Test building error nodes."""

    def test_leaf(self) -> None:
        error = err("disk full")
        assert error.message == "disk full"
        assert dict(error.attrs) == {}
        assert error.context == ()
        assert error.causes == ()
        assert error.incidental == ()

    def test_empty_message_rejected(self) -> None:
        with pytest.raises(ValueError):
            Error("")

    def test_err_with_attrs(self) -> None:
        error = err_with("bad input", ea(field="name", length=0))
        assert dict(error.attrs) == {"field": "name", "length": "0"}

    def test_attrs_read_only(self) -> None:
        error = err_with("bad input", ea(field="name"))
        with pytest.raises(TypeError):
            error.attrs["field"] = "other"  # type: ignore[index]

    def test_is_exception(self) -> None:
        """Errors travel through raise/except."""
        with pytest.raises(Error) as exc_info:
            raise err("boom")
        assert exc_info.value.message == "boom"


class TestWrapping:
    """Test adding layers of context."""

    def test_wrap_makes_single_cause(self) -> None:
        inner = err("disk full")
        outer = inner.wrap("upload failed")
        assert outer.message == "upload failed"
        assert outer.causes == (inner,)
        assert inner.causes == ()

    def test_module_wrap_with(self) -> None:
        inner = err("disk full")
        outer = wrap_with(inner, "upload failed", ea(file="a.txt"))
        assert dict(outer.attrs) == {"file": "a.txt"}
        assert outer.causes[0] is inner

    def test_wrap_plain_exception(self) -> None:
        """Plain exceptions are converted before wrapping."""
        outer = wrap(OSError("no space"), "upload failed")
        assert outer.causes[0].message == "no space"
        assert outer.causes[0].attrs["type"] == "OSError"

    def test_stack_captures_log(self) -> None:
        log = Log.new().fork(ea(job="sync"))
        outer = err("disk full").stack(log, "upload failed", ea(attempt=2))
        assert outer.context == (log,)
        assert dict(outer.attrs) == {"attempt": "2"}

    def test_with_context_copies(self) -> None:
        log = Log.new()
        error = err("x")
        copied = error.with_context(log)
        assert copied is not error
        assert copied.context == (log,)
        assert error.context == ()


class TestAggregation:
    """Test aggregate errors."""

    def test_children_keep_order(self) -> None:
        first, second = err("a failed"), err("b failed")
        error = agg_err("batch failed", [first, second])
        assert error.causes == (first, second)

    def test_empty_aggregate(self) -> None:
        """An aggregate of nothing is a childless node."""
        error = agg_err_with("batch failed", [], ea(size=0))
        assert error.causes == ()
        assert error.render(width=80) == "batch failed\n  - size = 0\n"

    def test_accepts_generator(self) -> None:
        error = agg_err("batch failed", (err(f"item {i}") for i in range(3)))
        assert [cause.message for cause in error.causes] == ["item 0", "item 1", "item 2"]


class TestIncidental:
    """Test attaching incidental errors."""

    def test_also_appends_and_returns_self(self) -> None:
        primary = err("primary").wrap("outer")
        causes = primary.causes
        cleanup = err("cleanup failed")

        result = primary.also(cleanup)

        assert result is primary
        assert primary.message == "outer"
        assert primary.causes == causes
        assert primary.incidental == (cleanup,)

    def test_also_accumulates(self) -> None:
        primary = err("primary")
        first, second = err("one"), err("two")
        primary.also(first).also(second)
        assert primary.incidental == (first, second)


class TestCombine:
    """Test merging an operation's outcome with its follow-up's."""

    def test_both_failed(self) -> None:
        primary, secondary = err("job failed"), err("cleanup failed")
        result = combine(primary, secondary)
        assert result is primary
        assert result.incidental == (secondary,)

    def test_only_secondary(self) -> None:
        secondary = err("cleanup failed")
        assert combine(None, secondary) is secondary

    def test_only_primary(self) -> None:
        primary = err("job failed")
        assert combine(primary, None) is primary
        assert primary.incidental == ()

    def test_neither(self) -> None:
        assert combine(None, None) is None

    def test_plain_exceptions_converted(self) -> None:
        result = combine(ValueError("bad"), OSError("gone"))
        assert result is not None
        assert result.message == "bad"
        assert result.incidental[0].message == "gone"


class TestStr:
    """Test the one-line summary."""

    def test_leaf(self) -> None:
        assert str(err("boom")) == "boom"

    def test_attrs_causes_and_incidental(self) -> None:
        error = err_with("a", ea(k=1)).wrap("b").also(err("c"))
        assert str(error) == "b, causes [a, k=1 ], incidental [c ]"

    def test_repr(self) -> None:
        assert repr(err("boom")) == "Error('boom', attrs={}, causes=0, incidental=0)"
