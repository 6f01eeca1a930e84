# qperformance/core/aggregate.py
from __future__ import annotations
import logging

from .model import (
    CHALLENGE_QUESTION, GENERIC_TYPE, QUESTION_TYPES,
    Aggregation, CountMatrices, EventRecord,
)
from .normalize import parse_question_number

_LOG = logging.getLogger(__name__)

_TYPE_INDEX: dict[str, int] = {t: i for i, t in enumerate(QUESTION_TYPES)}


def question_type(types: list[str], question_number: int) -> str:
    """Type of a 1-indexed question within a round's type sequence."""
    if question_number == CHALLENGE_QUESTION:
        return GENERIC_TYPE
    idx = question_number - 1
    if 0 <= idx < len(types):
        return types[idx]
    _LOG.debug("question %d outside round of %d, using %s", question_number, len(types), GENERIC_TYPE)
    return GENERIC_TYPE


def type_column(qtype: str) -> int:
    col = _TYPE_INDEX.get(qtype)
    if col is None:
        _LOG.debug("unknown question type %r, counted in column 0", qtype)
        return 0
    return col


def missing_round_warnings(missing: list[str]) -> list[str]:
    if not missing:
        return []
    return [
        "Warning: Some records were skipped due to missing question sets",
        f"Skipped Rounds: {', '.join(sorted(missing))}",
        "If your question sets are not named correctly, please rename them "
        "to match the round numbers in the quiz data file",
    ]


def aggregate(records: list[EventRecord],
              quizzers: list[str],
              round_map: dict[str, list[str]]) -> Aggregation:
    """
    Single pass over judged records.

    Records of rounds absent from ``round_map`` are skipped and reported once
    per round; every other record increments the cell of its quizzer and
    question type in the matrices implied by its event code.
    """
    rows: dict[str, int] = {}
    for i, name in enumerate(quizzers):
        rows.setdefault(name, i)
    result = Aggregation(quizzers=list(quizzers), totals=CountMatrices.zeros(len(quizzers)))
    missing_seen: set[str] = set()

    for r in records:
        if r.round_id not in round_map:
            if r.round_id not in missing_seen:
                missing_seen.add(r.round_id)
                result.missing_rounds.append(r.round_id)
            continue

        row = rows.get(r.quizzer)
        if row is None:
            if not quizzers:
                continue
            _LOG.debug("quizzer %r not enumerated, counted in row 0", r.quizzer)
            row = 0

        number = parse_question_number(r.question)
        qtype = question_type(round_map[r.round_id], number)
        col = type_column(qtype)
        _LOG.debug("%s round=%s q=%d type=%s quizzer=%s", r.event_code, r.round_id, number, qtype, r.quizzer)

        result.totals.apply(r.event_code, row, col)
        per_round = result.by_round.get(r.round_id)
        if per_round is None:
            per_round = result.by_round[r.round_id] = CountMatrices.zeros(len(quizzers))
        per_round.apply(r.event_code, row, col)

    if result.missing_rounds:
        _LOG.info("found question sets: %s", ", ".join(sorted(round_map)))
    result.warnings.extend(missing_round_warnings(result.missing_rounds))
    return result
