# qperformance/utils/detect.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal
import logging

from ..core.errors import InputLocationError

_LOG = logging.getLogger(__name__)

DetectedKind = Literal["rtf", "csv", "unknown"]


@dataclass(frozen=True)
class DetectedItem:
    path: Path        # actual path on disk
    kind: DetectedKind


def detect_kind(p: Path) -> DetectedKind:
    """
    Classify a single path.
    - .rtf -> 'rtf'  (set-maker question sets)
    - .csv -> 'csv'  (QuizMachine records)
    else   -> 'unknown'
    """
    suffix = p.suffix.lower()
    if suffix == ".rtf":
        return "rtf"
    if suffix == ".csv":
        return "csv"
    return "unknown"


def as_paths(value: str | Path | Iterable[str | Path] | None) -> list[Path]:
    if value is None:
        return []
    if isinstance(value, (str, Path)):
        return [Path(value)]
    return [Path(v) for v in value]


def discover_question_sets(roots: Iterable[Path], recurse: bool = False) -> list[DetectedItem]:
    """
    Each root is a question-set file or a folder of them.
    Folders contribute their .rtf files sorted by path; other files are skipped.
    """
    roots = list(roots)
    if not roots:
        raise InputLocationError("No question set location given.")
    for root in roots:
        if not root.exists():
            raise InputLocationError(f"Question set location does not exist: {root}")
        if not (root.is_file() or root.is_dir()):
            raise InputLocationError(f"Question set location is not a file or directory: {root}")

    items: list[DetectedItem] = []
    for root in roots:
        if root.is_file():
            candidates = [root]
        else:
            it = root.rglob("*") if recurse else root.glob("*")
            candidates = sorted(p for p in it if p.is_file())
            _LOG.info("found %d file(s) in directory %s", len(candidates), root)
        for p in candidates:
            kind = detect_kind(p)
            if kind != "rtf":
                _LOG.info("skipping non-RTF file %s", p.name)
                continue
            items.append(DetectedItem(p, kind))
    return items


def check_logs(paths: Iterable[Path]) -> list[Path]:
    paths = list(paths)
    if not paths:
        raise InputLocationError("No QuizMachine records file given.")
    for p in paths:
        if not p.is_file():
            raise InputLocationError(f"QuizMachine records file does not exist: {p}")
    return paths
