from dataclasses import dataclass, asdict
from typing import Optional

from .errors import InvalidArgument


def _check_total(total_cards) -> int:
    # bool is an int subclass but never a card count
    if isinstance(total_cards, bool) or not isinstance(total_cards, int) or total_cards < 0:
        raise InvalidArgument('total_cards must be a non-negative integer')
    return total_cards


def compute_accuracy(correct: int, incorrect: int) -> float:
    """Correct attempts as a percentage of all judged attempts, 2 decimals."""
    attempts = correct + incorrect
    if attempts == 0:
        return 0
    return round(correct / attempts * 100, 2)


@dataclass(frozen=True)
class ScoreSnapshot:
    correct: int
    incorrect: int
    remaining: int
    accuracy: float

    def to_dict(self) -> dict:
        return asdict(self)


class ScoreTracker:
    """Counts correct and incorrect picks against a fixed number of cards.

    The tracker does not know which prompt is on the table; callers record
    exactly one result per judged selection.
    """

    def __init__(self, total_cards: int):
        self._total_cards = _check_total(total_cards)
        self._correct = 0
        self._incorrect = 0

    @property
    def total_cards(self) -> int:
        return self._total_cards

    def record_correct(self) -> None:
        self._correct += 1

    def record_incorrect(self) -> None:
        self._incorrect += 1

    def accuracy(self) -> float:
        return compute_accuracy(self._correct, self._incorrect)

    def snapshot(self, total_cards: Optional[int] = None) -> ScoreSnapshot:
        total = self._total_cards if total_cards is None else total_cards
        return ScoreSnapshot(
            correct=self._correct,
            incorrect=self._incorrect,
            remaining=max(0, total - self._correct),
            accuracy=self.accuracy(),
        )

    def reset(self, total_cards: Optional[int] = None) -> None:
        if total_cards is not None:
            self._total_cards = _check_total(total_cards)
        self._correct = 0
        self._incorrect = 0
