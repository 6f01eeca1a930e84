# qperformance/core/quizzers.py
from __future__ import annotations
from collections import defaultdict

from .model import EventRecord
from .normalize import parse_team_number


def enumerate_quizzers(records: list[EventRecord]) -> list[str]:
    """
    Quizzer names ordered by team number, then by first appearance within the team.
    This ordering is the row index of the count matrices.
    """
    by_team: dict[int, list[str]] = defaultdict(list)
    seen: set[str] = set()

    for r in records:
        if r.quizzer in seen:
            continue
        seen.add(r.quizzer)
        by_team[parse_team_number(r.team)].append(r.quizzer)

    return [name for team in sorted(by_team) for name in by_team[team]]
