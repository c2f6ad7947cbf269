"""Tests for the context-aware log formatter."""
import logging

from sqlconst.core.logging import ContextFormatter


def _record(**extra):
    record = logging.LogRecord("sqlconst", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_defaults_for_missing_context():
    formatter = ContextFormatter("[table=%(table)s stage=%(stage)s] %(message)s")

    assert formatter.format(_record()) == "[table=- stage=-] hello"


def test_context_fields_are_rendered():
    formatter = ContextFormatter("[table=%(table)s stage=%(stage)s] %(message)s")

    assert formatter.format(_record(table="shop.models.Order", stage="MINE")) == (
        "[table=shop.models.Order stage=MINE] hello"
    )
