# qperformance/core/model.py
from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np

# canonical column order of matrices and report
QUESTION_TYPES: tuple[str, ...] = ("A", "G", "I", "Q", "R", "S", "V", "X")
GENERIC_TYPE = "G"
CHALLENGE_QUESTION = 21            # always carries GENERIC_TYPE

# pseudo-type summed from the memory-verse types
MEMORY_TYPE = "M"
MEMORY_TYPES: tuple[str, ...] = ("Q", "R", "V")

TEAM_CORRECT = "'TC'"
TEAM_ERROR = "'TE'"
BONUS_CORRECT = "'BC'"
BONUS_ERROR = "'BE'"
EVENT_CODES: tuple[str, ...] = (TEAM_CORRECT, TEAM_ERROR, BONUS_CORRECT, BONUS_ERROR)


@dataclass(frozen=True)
class EventRecord:
    fields: tuple[str, ...]   # raw line, positionally addressed
    tournament: str
    round_id: str             # quote-wrapped, e.g. "'12'"
    question: str             # 1-indexed, quote-wrapped
    quizzer: str
    team: str
    event_code: str           # one of EVENT_CODES for judged events


@dataclass
class CountMatrices:
    attempts: np.ndarray          # [quizzer][type]
    correct: np.ndarray
    bonus_attempts: np.ndarray
    bonus_correct: np.ndarray

    @classmethod
    def zeros(cls, n_quizzers: int, n_types: int = len(QUESTION_TYPES)) -> "CountMatrices":
        shape = (n_quizzers, n_types)
        return cls(np.zeros(shape), np.zeros(shape), np.zeros(shape), np.zeros(shape))

    def apply(self, event_code: str, row: int, col: int) -> None:
        if event_code == TEAM_CORRECT:
            self.attempts[row, col] += 1.0
            self.correct[row, col] += 1.0
        elif event_code == TEAM_ERROR:
            self.attempts[row, col] += 1.0
        elif event_code == BONUS_CORRECT:
            self.bonus_attempts[row, col] += 1.0
            self.bonus_correct[row, col] += 1.0
        elif event_code == BONUS_ERROR:
            self.bonus_attempts[row, col] += 1.0


@dataclass
class Aggregation:
    quizzers: list[str]
    totals: CountMatrices
    by_round: dict[str, CountMatrices] = field(default_factory=dict)
    missing_rounds: list[str] = field(default_factory=list)   # first-seen order
    warnings: list[str] = field(default_factory=list)
