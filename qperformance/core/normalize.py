# qperformance/core/normalize.py
from __future__ import annotations
import logging
import re

_LOG = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")


def strip_quotes(value: str) -> str:
    return str(value).strip().strip("'")


def quote(value: str) -> str:
    """Wrap a text value in single quotes the way QuizMachine writes its fields."""
    value = str(value)
    if not value:
        return value
    if not value.startswith("'"):
        value = "'" + value
    if not value.endswith("'") or len(value) == 1:
        value = value + "'"
    return value


def parse_question_number(raw: str) -> int:
    """1-indexed question number; anything unparseable counts as question 1."""
    s = strip_quotes(raw)
    if _DIGITS.fullmatch(s):
        return int(s)
    _LOG.debug("unparseable question number %r, defaulting to 1", raw)
    return 1


def parse_team_number(raw: str) -> int:
    """Bare digits only; quoted or padded teams (e.g. "'3'", " 3") count as team 0."""
    s = str(raw)
    if _DIGITS.fullmatch(s):
        return int(s)
    if s:
        _LOG.debug("non-numeric team %r, defaulting to team 0", raw)
    return 0
