# qperformance/core/reports.py
from __future__ import annotations
from pathlib import Path
from typing import Iterable
import logging
import numpy as np
import pandas as pd

from .model import MEMORY_TYPE, MEMORY_TYPES, QUESTION_TYPES, Aggregation, CountMatrices

_LOG = logging.getLogger(__name__)

# questions attempted / correct, bonuses attempted / correct
SUFFIXES: tuple[str, ...] = ("QA", "QC", "BA", "BC")


def selected_types(types: Iterable[str] | None = None) -> list[str]:
    """Report columns in canonical order; ``M`` (memory-verse total) goes last."""
    if types is None:
        return list(QUESTION_TYPES)
    wanted = {str(t).strip() for t in types}
    unknown = wanted - set(QUESTION_TYPES) - {MEMORY_TYPE}
    if unknown:
        _LOG.warning("ignoring unknown question type(s): %s", ", ".join(sorted(unknown)))
    out = [t for t in QUESTION_TYPES if t in wanted]
    if MEMORY_TYPE in wanted:
        out.append(MEMORY_TYPE)
    return out


def _type_counts(m: CountMatrices, qtype: str) -> tuple[np.ndarray, ...]:
    mats = (m.attempts, m.correct, m.bonus_attempts, m.bonus_correct)
    if qtype == MEMORY_TYPE:
        cols = [QUESTION_TYPES.index(t) for t in MEMORY_TYPES]
        return tuple(mat[:, cols].sum(axis=1) for mat in mats)
    col = QUESTION_TYPES.index(qtype)
    return tuple(mat[:, col] for mat in mats)


def build_report_frame(quizzers: list[str], m: CountMatrices,
                       types: Iterable[str] | None = None) -> pd.DataFrame:
    """One row per quizzer, four count columns per selected question type."""
    columns = ["Quizzer"]
    data: dict[str, object] = {"Quizzer": list(quizzers)}
    for qtype in selected_types(types):
        for suffix, values in zip(SUFFIXES, _type_counts(m, qtype)):
            label = f"{qtype} {suffix}"
            columns.append(label)
            data[label] = values
    return pd.DataFrame(data, columns=columns)


def render_report(frame: pd.DataFrame, delimiter: str = ",") -> str:
    sep = f"{delimiter}\t"
    lines = [sep.join(str(c) for c in frame.columns)]
    for name, *counts in frame.itertuples(index=False, name=None):
        lines.append(sep.join([str(name), *(f"{float(v):.1f}" for v in counts)]))
    return "".join(line + "\n" for line in lines)


def build_report(agg: Aggregation,
                 types: Iterable[str] | None = None,
                 delimiter: str = ",",
                 display_individual_rounds: bool = False) -> str:
    """
    Overall table, optionally followed by one table per counted round.
    Round tables only list quizzers with at least one event in that round.
    """
    types = selected_types(types)
    text = render_report(build_report_frame(agg.quizzers, agg.totals, types), delimiter)
    if not display_individual_rounds:
        return text

    parts = [text]
    for round_id in sorted(agg.by_round):
        m = agg.by_round[round_id]
        active = (m.attempts.sum(axis=1) + m.bonus_attempts.sum(axis=1)) > 0
        frame = build_report_frame(agg.quizzers, m, types).loc[active]
        parts.append(f"\nRound {round_id}\n")
        parts.append(render_report(frame, delimiter))
    return "".join(parts)


def write_report(text: str, out_path: Path, title: str = "qperf") -> None:
    """Save report text; an existing file is never overwritten."""
    out_path = Path(out_path)
    if out_path.exists():
        raise FileExistsError(f"Output file already exists. Choose a different file name: {out_path}")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("x", encoding="utf-8", newline="") as f:
        f.write(text)
    print(f"[OK] wrote report: {title} → {out_path}")
