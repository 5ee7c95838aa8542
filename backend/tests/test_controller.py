import random

import pytest

from karuta.services.games import GameController, InvalidArgument


def _wrong_id(controller):
    prompt = controller.current_prompt()
    return next(c.id for c in controller.state().remaining_cards if c.id != prompt.id)


def test_init_game_returns_fresh_state(make_records):
    controller = GameController()
    state = controller.init_game(make_records(10))
    assert state.total_rounds == 10
    assert state.current_round == 1
    assert state.score == 0
    assert state.current_prompt is not None
    assert controller.score_snapshot().remaining == 10


def test_init_game_rejects_empty():
    with pytest.raises(InvalidArgument):
        GameController().init_game([])


def test_select_card_updates_pool_and_score_together(make_records):
    controller = GameController()
    controller.init_game(make_records(5))
    prompt = controller.current_prompt()
    result = controller.select_card(prompt.id)
    assert result.correct is True
    state = controller.state()
    assert state.score == 1
    assert len(state.remaining_cards) == 4
    assert controller.score_snapshot().remaining == 4


def test_wrong_pick_is_recorded(make_records):
    controller = GameController()
    controller.init_game(make_records(5))
    result = controller.select_card(_wrong_id(controller))
    assert result.correct is False
    assert result.correct_record == controller.current_prompt()
    assert controller.state().incorrect_count == 1
    assert controller.score_snapshot().accuracy == 0


def test_ten_card_game_seven_right_three_wrong(make_records):
    controller = GameController(rng=random.Random(3))
    controller.init_game(make_records(10))
    wrong_rounds = {1, 4, 8}
    for round_no in range(10):
        if round_no in wrong_rounds:
            controller.select_card(_wrong_id(controller))
        else:
            controller.select_card(controller.current_prompt().id)
        controller.next_round()

    state = controller.state()
    snap = controller.score_snapshot()
    assert controller.is_game_over() is True
    assert state.score == 7
    assert state.incorrect_count == 3
    assert snap.accuracy == 70.0
    assert snap.remaining == 3
    assert len(state.remaining_cards) == 3


def test_attempts_count_matches_calls_before_game_over(make_records):
    controller = GameController(rng=random.Random(11))
    controller.init_game(make_records(6))
    rng = random.Random(5)
    calls = 0
    while not controller.is_game_over():
        if rng.random() < 0.5:
            controller.select_card(controller.current_prompt().id)
            calls += 1
            controller.next_round()
        else:
            controller.select_card(_wrong_id(controller) if len(controller.state().remaining_cards) > 1 else -1)
            calls += 1
            if rng.random() < 0.3:
                controller.next_round()
    state = controller.state()
    assert state.score + state.incorrect_count == calls

    # Calls after the game ended are not judged
    controller.select_card(1)
    after = controller.state()
    assert after.score + after.incorrect_count == calls


def test_select_after_game_over_is_harmless(make_records):
    [p1] = make_records(1)
    controller = GameController()
    controller.init_game([p1])
    controller.select_card(p1.id)
    assert controller.next_round() is False
    assert controller.select_card(p1.id) == (False, None)
    assert controller.current_prompt() is None
    assert controller.state().is_game_over is True
    assert controller.score_snapshot().correct == 1


def test_state_is_a_defensive_copy(make_records):
    controller = GameController()
    controller.init_game(make_records(5))
    first = controller.state()
    second = controller.state()
    assert first == second
    assert first.remaining_cards is not second.remaining_cards
    first.remaining_cards.pop()
    assert len(controller.state().remaining_cards) == 5


def test_replay_discards_previous_playthrough(make_records):
    controller = GameController()
    controller.init_game(make_records(3))
    controller.select_card(controller.current_prompt().id)
    controller.next_round()
    state = controller.init_game(make_records(4))
    assert state.score == 0
    assert state.current_round == 1
    assert controller.score_snapshot().to_dict() == {
        'correct': 0, 'incorrect': 0, 'remaining': 4, 'accuracy': 0,
    }


def test_state_to_dict_uses_wire_names(make_records):
    controller = GameController()
    controller.init_game(make_records(2))
    payload = controller.state().to_dict()
    assert set(payload) == {
        'remainingCards', 'currentPoem', 'currentRound', 'totalRounds',
        'score', 'incorrectCount', 'isGameOver',
    }
    assert set(payload['currentPoem']) == {'id', 'author', 'upperVerse', 'lowerVerse'}
