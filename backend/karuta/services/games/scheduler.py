import time
from typing import Set, Tuple

from karuta import socketio
from .sequencer import JudgeResult
from .sessions import get_session


_scheduled_feedback_keys: Set[Tuple[str, int, int]] = set()


def _is_current(code: str, playthrough: int) -> bool:
    session = get_session(code)
    return session is not None and session.playthrough == playthrough


def schedule_feedback(app, game_code: str, result: JudgeResult) -> None:
    """Schedule the timed feedback that follows a judged pick.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Ensures a single timer per (game_code, playthrough, round)
    - Correct pick: highlight -> card removal -> auto-advance to next round
    - Incorrect pick: highlight -> input re-enabled
    - A timer from a playthrough replaced by a replay aborts without touching the new game
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    session = get_session(game_code)
    if not session or result.correct_record is None:
        return

    round_no = session.controller.state().current_round
    key = (session.code, session.playthrough, round_no)
    if key in _scheduled_feedback_keys:
        app.logger.info(f"[timer-skip] game={session.code} round={round_no} already scheduled")
        return

    _scheduled_feedback_keys.add(key)
    session.feedback_pending = True

    if result.correct:
        highlight_ms = int(app.config.get('FEEDBACK_CORRECT_MS', 800))
        removal_ms = int(app.config.get('CARD_REMOVAL_MS', 400))
    else:
        highlight_ms = int(app.config.get('FEEDBACK_INCORRECT_MS', 600))
        removal_ms = 0
    app.logger.info(
        f"[timer-set] game={session.code} playthrough={session.playthrough} round={round_no} "
        f"correct={result.correct} highlight={highlight_ms}ms removal={removal_ms}ms"
    )

    def _worker(code: str, expected_playthrough: int, expected_round: int, correct: bool, card_id: int,
                highlight: int, removal: int):
        room = f"game:{code}"
        time.sleep(highlight / 1000.0)
        if _is_current(code, expected_playthrough):
            socketio.emit('feedback_cleared', {'game_code': code, 'correct': correct, 'card_id': card_id},
                          to=room, namespace='/ws')
            if correct:
                time.sleep(removal / 1000.0)
                if _is_current(code, expected_playthrough):
                    socketio.emit('card_removed', {'game_code': code, 'card_id': card_id},
                                  to=room, namespace='/ws')

        with app.app_context():
            _scheduled_feedback_keys.discard((code, expected_playthrough, expected_round))
            s = get_session(code)
            if not s:
                app.logger.info(f"[timer-abort] game={code} session ended")
                return
            if s.playthrough != expected_playthrough:
                # replay already reset feedback_pending for the new game
                app.logger.info(
                    f"[timer-abort] game={code} playthrough={expected_playthrough} replaced by {s.playthrough}"
                )
                return
            app.logger.info(f"[timer-fire] game={code} expected_round={expected_round} correct={correct}")

            state = s.controller.state()
            if correct and app.config.get('AUTO_ADVANCE', True) \
                    and not state.is_game_over and state.current_round == expected_round:
                if s.controller.next_round():
                    app.logger.info(f"[next_round] game={code} advance round {expected_round} -> {expected_round + 1}")
                    socketio.emit('state_update', {'game_code': code}, to=room, namespace='/ws')
                else:
                    app.logger.info(f"[finish] game={code} finished at round={expected_round}")
                    socketio.emit('game_over', {'game_code': code, 'score': s.controller.score_snapshot().to_dict()},
                                  to=room, namespace='/ws')
            s.feedback_pending = False

    args = (session.code, session.playthrough, round_no, result.correct, result.correct_record.id,
            highlight_ms, removal_ms)
    if app.config.get('TESTING'):
        _worker(*args)
    else:
        socketio.start_background_task(_worker, *args)
