# qperformance/loaders/rtf_loader.py
from __future__ import annotations
from pathlib import Path
from typing import Iterable
import logging
import re

from ..core.errors import UnreadableDocumentError

_LOG = logging.getLogger(__name__)

_SET_MARKER = re.compile(r"SET #([A-Za-z0-9]+)")
_SEPARATOR = "\\tab"


def parse_question_types(text: str) -> dict[str, list[str]]:
    """
    Map each round of a set-maker RTF document to its question-type codes.

    The text is split on the ``\\tab`` control word. A fragment containing
    ``SET #<id>`` starts a new round; every even fragment contributes the
    character just before its trailing marker as the next type code.
    A document without any marker ends up under the empty identifier.
    """
    by_round: dict[str, list[str]] = {}
    round_id = ""
    types: list[str] = []

    for i, part in enumerate(text.split(_SEPARATOR)):
        # check every fragment, set headers are not always at an even position
        m = _SET_MARKER.search(part)
        if m is not None:
            if types:
                by_round[round_id] = types
            round_id = f"'{m.group(1)}'"
            types = []

        if i % 2 == 0 and len(part) > 1:
            types.append(part[-2])

    by_round[round_id] = types
    return by_round


def read_question_set(path: Path) -> dict[str, list[str]]:
    try:
        # no newline translation: a CRLF "\r" can be the character a fragment contributes
        text = Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableDocumentError(f"Cannot read question set {path}: {e}") from e
    by_round = parse_question_types(text)
    _LOG.info("parsed %d round(s) from %s", len(by_round), Path(path).name)
    return by_round


def merge_round_maps(maps: Iterable[dict[str, list[str]]]) -> tuple[dict[str, list[str]], list[str]]:
    """First definition of a round wins; every later one becomes a warning."""
    merged: dict[str, list[str]] = {}
    warns: list[str] = []
    for by_round in maps:
        for round_id, types in by_round.items():
            if round_id in merged:
                msg = f"Warning: Duplicate question set number: {round_id}, using only the first."
                _LOG.warning(msg)
                warns.append(msg)
                continue
            merged[round_id] = types
    return merged, warns


def load(paths: Iterable[Path]) -> tuple[dict[str, list[str]], list[str]]:
    """Read every question-set document in order and merge their rounds."""
    return merge_round_maps(read_question_set(p) for p in paths)
