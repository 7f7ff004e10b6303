"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior, validation and the
nesting bound applied by the parser.
"""

import logging
from threading import Thread

import pytest

from chatmark import (
    ConfigError,
    ParseConfig,
    Parser,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from chatmark.builder import bold, document, plain, underline
from chatmark.config import DEFAULT_MAX_NESTING_DEPTH


@pytest.fixture(autouse=True)
def _restore_config():  # type: ignore[no-untyped-def]
    yield
    reset_parse_config()


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        assert ParseConfig().max_nesting_depth == DEFAULT_MAX_NESTING_DEPTH == 64

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.max_nesting_depth = 3  # type: ignore[misc]

    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_non_positive(self, value: int) -> None:
        with pytest.raises(ConfigError, match="max_nesting_depth"):
            ParseConfig(max_nesting_depth=value)

    @pytest.mark.parametrize("value", ["8", 2.5, True, None])
    def test_rejects_non_integers(self, value: object) -> None:
        with pytest.raises(ConfigError) as exc_info:
            ParseConfig(max_nesting_depth=value)  # type: ignore[arg-type]
        assert exc_info.value.option == "max_nesting_depth"

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ParseConfig(max_nesting_depth=0)


class TestFromDict:
    """ParseConfig.from_dict filters unknown keys."""

    def test_known_keys(self) -> None:
        assert ParseConfig.from_dict({"max_nesting_depth": 8}) == ParseConfig(8)

    def test_unknown_keys_ignored(self) -> None:
        assert ParseConfig.from_dict({"tables": True}) == ParseConfig()

    def test_invalid_value_still_validated(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig.from_dict({"max_nesting_depth": 0})


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def test_get_default(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(max_nesting_depth=3))
        assert get_parse_config().max_nesting_depth == 3
        reset_parse_config()
        assert get_parse_config().max_nesting_depth == DEFAULT_MAX_NESTING_DEPTH

    def test_context_manager_restores(self) -> None:
        with parse_config_context(ParseConfig(max_nesting_depth=2)):
            assert get_parse_config().max_nesting_depth == 2
        assert get_parse_config() == ParseConfig()

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(max_nesting_depth=2)):
                raise RuntimeError("boom")
        assert get_parse_config() == ParseConfig()

    def test_nested_contexts(self) -> None:
        with parse_config_context(ParseConfig(max_nesting_depth=5)):
            with parse_config_context(ParseConfig(max_nesting_depth=2)):
                assert get_parse_config().max_nesting_depth == 2
            assert get_parse_config().max_nesting_depth == 5


class TestThreadIsolation:
    """Config set in one thread is invisible to others."""

    def test_threads_do_not_share_config(self) -> None:
        results: dict[str, int] = {}

        def worker(name: str, depth: int) -> None:
            set_parse_config(ParseConfig(max_nesting_depth=depth))
            results[name] = get_parse_config().max_nesting_depth

        threads = [Thread(target=worker, args=(f"t{i}", i + 1)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {"t0": 1, "t1": 2, "t2": 3, "t3": 4}
        assert get_parse_config() == ParseConfig()


class TestNestingBound:
    """Content nested past max_nesting_depth stays raw text."""

    def test_deep_content_kept_as_plain(self) -> None:
        with parse_config_context(ParseConfig(max_nesting_depth=2)):
            doc = parse("**__~~deep~~__**")
        assert doc == document(bold(underline(plain("~~deep~~"))))

    def test_render_still_reproduces_input(self) -> None:
        source = "**__~~||deep||~~__**"
        doc = parse(source, max_nesting_depth=1)
        assert doc == document(bold(plain("__~~||deep||~~__")))
        assert doc.render_markdown() == source

    def test_warning_logged_once(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chatmark"):
            parse("**__a__** **__b__**", max_nesting_depth=1)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "1 levels" in warnings[0].getMessage()

    def test_no_warning_when_nothing_cut(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chatmark"):
            doc = parse("**plain**", max_nesting_depth=1)
        assert doc == document(bold("plain"))
        assert not caplog.records

    def test_explicit_config_beats_context(self) -> None:
        with parse_config_context(ParseConfig(max_nesting_depth=1)):
            doc = Parser("*_a_*", ParseConfig()).parse()
        assert doc.render_plain() == "a"

    def test_default_bound_never_reached_by_parsing(self) -> None:
        source = "||~~__**`x`**__~~||" * 3
        assert parse(source).render_plain() == "xxx"
