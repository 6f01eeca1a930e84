# qperformance/loaders/log_loader.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import pandas as pd

from ..core.errors import LogParseError
from ..core.model import EVENT_CODES, EventRecord
from ..core.normalize import quote

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogLayout:
    """Zero-based column positions of a QuizMachine record line."""
    tournament: int = 0
    round_id: int = 4
    question: int = 5
    quizzer: int = 7
    team: int = 8
    event_code: int = 10

    @classmethod
    def from_config(cls, cfg: dict | None) -> "LogLayout":
        sec = (cfg or {}).get("log_layout", {}) if cfg else {}
        sec = sec or {}
        default = cls()
        return cls(
            tournament=int(sec.get("tournament", default.tournament)),
            round_id=int(sec.get("round", default.round_id)),
            question=int(sec.get("question", default.question)),
            quizzer=int(sec.get("quizzer", default.quizzer)),
            team=int(sec.get("team", default.team)),
            event_code=int(sec.get("event_code", default.event_code)),
        )

    def record(self, fields: tuple[str, ...]) -> EventRecord:
        def at(idx: int) -> str:
            return fields[idx] if 0 <= idx < len(fields) else ""

        return EventRecord(
            fields=fields,
            tournament=at(self.tournament),
            round_id=at(self.round_id),
            question=at(self.question),
            quizzer=at(self.quizzer),
            team=at(self.team),
            event_code=at(self.event_code),
        )


def _df_from_csv(path: Path) -> pd.DataFrame:
    try:
        df = pd.read_csv(path, header=None, sep=",", dtype=str,
                         keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise LogParseError(str(e)) from e
    # pandas pads short rows with NaN; every line must have the full width
    short = df.isna().any(axis=1)
    if short.any():
        line = int(short.to_numpy().argmax()) + 1
        raise LogParseError(f"Expected {df.shape[1]} fields in record {line}, found fewer")
    return df


def read_log(path: Path, layout: LogLayout | None = None) -> list[EventRecord]:
    """
    Read a headerless QuizMachine CSV into records, one per line.
    Any structurally invalid line fails the whole file with LogParseError.
    """
    layout = layout or LogLayout()
    df = _df_from_csv(Path(path))
    records = [layout.record(tuple(str(v) for v in row))
               for row in df.itertuples(index=False, name=None)]
    _LOG.info("read %d record(s) from %s", len(records), Path(path).name)
    return records


def filter_records(records: list[EventRecord]) -> list[EventRecord]:
    """Keep judged events only (team/bonus correct/error)."""
    return [r for r in records if r.event_code in EVENT_CODES]


def filter_tournament(records: list[EventRecord], tournament: str) -> list[EventRecord]:
    """Keep records of one tournament; an empty name keeps everything."""
    if not tournament:
        return list(records)
    name = quote(tournament)
    return [r for r in records if r.tournament == name]
