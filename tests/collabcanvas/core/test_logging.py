import logging

from collabcanvas.core.logging import resolve_level, setup_logging


def test_setup_logging_string_levels():
    setup_logging("ERROR")
    root = logging.getLogger()
    assert root.getEffectiveLevel() == logging.ERROR
    assert len(root.handlers) >= 1

    setup_logging("debug")
    assert logging.getLogger().getEffectiveLevel() == logging.DEBUG


def test_setup_logging_numeric():
    setup_logging(10)  # DEBUG
    assert logging.getLogger().getEffectiveLevel() == logging.DEBUG


def test_setup_logging_from_env(monkeypatch):
    monkeypatch.setenv("COLLABCANVAS_LOG_LEVEL", "WARNING")
    setup_logging(None)
    assert logging.getLogger().getEffectiveLevel() == logging.WARNING


def test_resolve_level_fallbacks():
    assert resolve_level("20") == logging.INFO
    assert resolve_level("warn") == logging.WARNING
    assert resolve_level("bogus") == logging.INFO
    assert resolve_level(None) == logging.INFO
