# qperformance/core/pipeline.py
from __future__ import annotations
from pathlib import Path
from typing import Iterable
import logging

from ..loaders import log_loader, rtf_loader
from ..loaders.log_loader import LogLayout
from ..utils.detect import as_paths, check_logs, discover_question_sets
from .aggregate import aggregate
from .errors import LogParseError
from .model import EventRecord
from .normalize import quote
from .quizzers import enumerate_quizzers
from .reports import build_report

_LOG = logging.getLogger(__name__)


def _read_logs(paths: list[Path], layout: LogLayout, verbose: bool) -> list[EventRecord]:
    records: list[EventRecord] = []
    for path in paths:
        try:
            records.extend(log_loader.read_log(path, layout))
        except LogParseError as e:
            # recovered: the run goes on without this file's records
            _LOG.warning("Quiz data contains formatting error: %s", e)
            continue
        if verbose:
            print(f"[log] {path.name}: {len(records)} record(s) so far")
    return records


def qperf(question_sets: str | Path | Iterable[str | Path],
          logs: str | Path | Iterable[str | Path],
          verbose: bool = False,
          types: Iterable[str] | None = None,
          delimiter: str = ",",
          tournament: str = "",
          display_individual_rounds: bool = False,
          layout: LogLayout | None = None,
          recurse: bool = False) -> tuple[list[str], str]:
    """
    Per-quizzer, per-question-type statistics from question sets and QuizMachine logs.

    Returns ``(warnings, report_text)``. Missing inputs and unreadable question
    sets raise ``QPerfError`` subclasses; data problems become warnings.
    """
    layout = layout or LogLayout()
    warns: list[str] = []

    # validate every location before parsing anything
    qset_items = discover_question_sets(as_paths(question_sets), recurse=recurse)
    log_paths = check_logs(as_paths(logs))
    if verbose:
        print(f"[qsets] {len(qset_items)} question set file(s)")
        for item in qset_items:
            print(f"  [rtf] {item.path.name}")

    round_map, dup_warns = rtf_loader.load(item.path for item in qset_items)
    warns.extend(dup_warns)
    if verbose:
        print(f"[qsets] rounds: {', '.join(sorted(round_map)) or '-'}")

    judged = log_loader.filter_records(_read_logs(log_paths, layout, verbose))
    if tournament:
        kept = log_loader.filter_tournament(judged, tournament)
        if judged and not kept:
            warns.append(f"Warning: No records found for tournament {quote(tournament)}")
        judged = kept
    if verbose:
        print(f"[log] {len(judged)} judged record(s)")

    quizzers = enumerate_quizzers(judged)
    if verbose:
        print(f"[quizzers] {', '.join(quizzers) or '-'}")

    agg = aggregate(judged, quizzers, round_map)
    warns.extend(agg.warnings)

    report = build_report(agg, types=types, delimiter=delimiter,
                          display_individual_rounds=display_individual_rounds)
    return warns, report


def qperformance(question_sets: str | Path | Iterable[str | Path],
                 logs: str | Path | Iterable[str | Path]) -> tuple[list[str], str]:
    return qperf(question_sets, logs, verbose=False)
