"""Tests for attribute maps and configurators."""

from errtree.attrs import dbg_str, ea, extend_with, new_attrs, pretty_dbg_str


class TestExtendWith:
    """Test copying and extending attribute maps."""

    def test_none_configurator_copies(self) -> None:
        """A missing configurator yields an equal but distinct map."""
        base = {"a": "1"}
        out = extend_with(base, None)
        assert out == base
        assert out is not base

    def test_base_never_mutated(self) -> None:
        """The configurator writes into the copy only."""
        base = {"a": "1"}
        out = extend_with(base, ea(b=2))
        assert base == {"a": "1"}
        assert out == {"a": "1", "b": "2"}

    def test_last_write_wins(self) -> None:
        """Repeated keys take the most recently written value."""
        out = extend_with(extend_with(new_attrs(), ea(a=1, b=2)), ea(b=3))
        assert out == {"a": "1", "b": "3"}

    def test_custom_configurator(self) -> None:
        """Any callable taking the map works as a configurator."""

        def configure(attrs: dict[str, str]) -> None:
            attrs["path"] = "/tmp/x"
            attrs["size"] = "0"

        assert extend_with({}, configure) == {"path": "/tmp/x", "size": "0"}


class TestEa:
    """Test the keyword configurator builder."""

    def test_values_stringified(self) -> None:
        """Non-string values are converted with str()."""
        attrs = new_attrs()
        ea(count=3, ratio=0.5, flag=None)(attrs)
        assert attrs == {"count": "3", "ratio": "0.5", "flag": "None"}

    def test_str_deferred_until_applied(self) -> None:
        """Conversion happens when the configurator runs, not when built."""
        calls = []

        class Expensive:
            def __str__(self) -> str:
                calls.append(1)
                return "expensive"

        configure = ea(value=Expensive())
        assert calls == []
        attrs = new_attrs()
        configure(attrs)
        assert attrs == {"value": "expensive"}
        assert calls == [1]


class TestDebugStrings:
    """Test repr-based attribute helpers."""

    def test_dbg_str_is_repr(self) -> None:
        assert dbg_str("a b") == "'a b'"
        assert dbg_str([1, 2]) == "[1, 2]"

    def test_pretty_dbg_str_multiline_for_large_values(self) -> None:
        """Large nested values are spread over several lines."""
        value = {f"key_{i}": list(range(10)) for i in range(5)}
        text = pretty_dbg_str(value)
        assert "\n" in text
        assert "'key_0'" in text
