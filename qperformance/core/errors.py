# qperformance/core/errors.py
from __future__ import annotations


class QPerfError(Exception):
    """Base class for errors that abort a qperf run."""


class InputLocationError(QPerfError):
    """A question-set or log path is missing or of the wrong kind."""


class UnreadableDocumentError(QPerfError):
    """A question-set document could not be read as text."""


class LogParseError(QPerfError):
    """The event log is not a well-formed delimited table.

    Raised by the log reader; the pipeline recovers from it.
    """
