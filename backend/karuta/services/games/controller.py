import random
from typing import Optional

from .records import PoemRecord
from .scoring import ScoreSnapshot, ScoreTracker
from .sequencer import GameState, JudgeResult, RoundSequencer


class GameController:
    """Single entry point for a playthrough: judges selections, keeps the
    score in step with the card pool and answers state queries."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._sequencer = RoundSequencer(rng=rng)
        self._tracker = ScoreTracker(0)

    def init_game(self, poems) -> GameState:
        self._sequencer.init_game(poems)
        self._tracker.reset(len(poems))
        return self.state()

    def current_prompt(self) -> Optional[PoemRecord]:
        return self._sequencer.current_prompt()

    def select_card(self, card_id) -> JudgeResult:
        if self._sequencer.is_game_over():
            return JudgeResult(False, None)
        result = self._sequencer.judge(card_id)
        if result.correct_record is None:
            return result
        if result.correct:
            self._tracker.record_correct()
        else:
            self._tracker.record_incorrect()
        return result

    def next_round(self) -> bool:
        return self._sequencer.advance()

    def is_game_over(self) -> bool:
        return self._sequencer.is_game_over()

    def score_snapshot(self) -> ScoreSnapshot:
        return self._tracker.snapshot()

    def state(self) -> GameState:
        state = self._sequencer.state()
        snapshot = self._tracker.snapshot()
        state.score = snapshot.correct
        state.incorrect_count = snapshot.incorrect
        return state
