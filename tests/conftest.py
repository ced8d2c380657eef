"""Pytest configuration and shared fixtures for the bbcode-ast test suite."""

import logging
import os
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

from bbcode_ast import BBCodeParser

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=500, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=100)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FORUM_TAGS = ["b", "i", "u", "s", "color", "size", "url", "img", "quote", "list", "*", "code"]


@pytest.fixture
def strict_parser() -> BBCodeParser:
    """Case-insensitive, strict parser over a forum tag set including list items."""
    return BBCodeParser(FORUM_TAGS)


@pytest.fixture
def lenient_parser() -> BBCodeParser:
    """Case-insensitive, lenient parser over a forum tag set including list items."""
    return BBCodeParser(FORUM_TAGS, lenient=True)


@pytest.fixture
def restore_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level changed by configure_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield
    finally:
        for handler in root_logger.handlers:
            if handler not in handlers:
                handler.close()
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
