import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from .errors import InvalidArgument
from .records import PoemRecord

logger = logging.getLogger(__name__)


def fisher_yates_shuffle(items, rng: Optional[random.Random] = None) -> list:
    """Return a uniformly shuffled copy of ``items``; the input is untouched."""
    rng = rng or random
    arr = list(items)
    for i in range(len(arr) - 1, 0, -1):
        j = rng.randint(0, i)
        arr[i], arr[j] = arr[j], arr[i]
    return arr


class JudgeResult(NamedTuple):
    correct: bool
    correct_record: Optional[PoemRecord]

    def to_dict(self) -> dict:
        return {
            'correct': self.correct,
            'correctCard': self.correct_record.to_dict() if self.correct_record else None,
        }


@dataclass
class GameState:
    remaining_cards: List[PoemRecord] = field(default_factory=list)
    current_prompt: Optional[PoemRecord] = None
    current_round: int = 1
    total_rounds: int = 0
    score: int = 0
    incorrect_count: int = 0
    is_game_over: bool = False

    def to_dict(self) -> dict:
        return {
            'remainingCards': [card.to_dict() for card in self.remaining_cards],
            'currentPoem': self.current_prompt.to_dict() if self.current_prompt else None,
            'currentRound': self.current_round,
            'totalRounds': self.total_rounds,
            'score': self.score,
            'incorrectCount': self.incorrect_count,
            'isGameOver': self.is_game_over,
        }


class RoundSequencer:
    """Owns the reading order, the pool of cards still on the field and the
    round index for one playthrough.

    Reading order and pool are shuffled independently: the pool is the
    display order of grab cards and need not line up with the prompts.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng
        self._reading_order: List[PoemRecord] = []
        self._remaining: List[PoemRecord] = []
        self._round_index = 0
        self._total_rounds = 0
        self._score = 0
        self._incorrect_count = 0
        self._game_over = False

    def init_game(self, poems) -> GameState:
        if isinstance(poems, (str, bytes)) or not isinstance(poems, Sequence) or len(poems) == 0:
            raise InvalidArgument('poems must be a non-empty sequence')
        self._reading_order = fisher_yates_shuffle(poems, self._rng)
        self._remaining = fisher_yates_shuffle(poems, self._rng)
        self._total_rounds = len(self._reading_order)
        self._round_index = 0
        self._score = 0
        self._incorrect_count = 0
        self._game_over = False
        logger.debug("sequencer initialised with %d poems", self._total_rounds)
        return self.state()

    @property
    def total_rounds(self) -> int:
        return self._total_rounds

    @property
    def remaining_count(self) -> int:
        return len(self._remaining)

    def current_prompt(self) -> Optional[PoemRecord]:
        if self._game_over or self._round_index >= self._total_rounds:
            return None
        return self._reading_order[self._round_index]

    def judge(self, selected_id) -> JudgeResult:
        prompt = self.current_prompt()
        if prompt is None:
            return JudgeResult(False, None)

        if selected_id == prompt.id:
            for idx, card in enumerate(self._remaining):
                if card.id == selected_id:
                    del self._remaining[idx]
                    break
            self._score += 1
            return JudgeResult(True, prompt)

        self._incorrect_count += 1
        return JudgeResult(False, prompt)

    def advance(self) -> bool:
        if self._game_over:
            return False
        self._round_index += 1
        # Either condition ends the game; out-of-order judging can split them
        if self._round_index >= self._total_rounds or not self._remaining:
            self._game_over = True
            logger.debug("sequencer finished at round index %d", self._round_index)
            return False
        return True

    def is_game_over(self) -> bool:
        return self._game_over

    def state(self) -> GameState:
        return GameState(
            remaining_cards=list(self._remaining),
            current_prompt=self.current_prompt(),
            current_round=min(self._round_index + 1, max(self._total_rounds, 1)),
            total_rounds=self._total_rounds,
            score=self._score,
            incorrect_count=self._incorrect_count,
            is_game_over=self._game_over,
        )
