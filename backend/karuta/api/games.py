from flask import Blueprint, jsonify, request, current_app, abort
from karuta import socketio
from karuta.models import load_catalog
from karuta.services.games.errors import InvalidArgument
from karuta.services.games.scheduler import schedule_feedback
from karuta.services.games.sessions import create_session, get_session, restart_session
from karuta.services.games.validator import validate_collection
from karuta.socketio_events import end_session_and_notify


games = Blueprint('games', __name__)


@games.errorhandler(InvalidArgument)
def handle_invalid_argument(exc):
    return jsonify({'error': str(exc)}), 400


@games.errorhandler(404)
def handle_not_found(exc):
    return jsonify({'error': 'Game not found'}), 404


def _session_or_404(game_code):
    session = get_session(game_code)
    if session is None:
        abort(404)
    return session


def _load_validated_catalog():
    """Return the catalog as PoemRecords, or (None, errors) when unusable."""
    poems = load_catalog()
    if not poems:
        return None, ['Poem data has not been loaded']
    result = validate_collection([p.to_dict() for p in poems])
    if not result.valid:
        return None, result.errors
    return [p.to_record() for p in poems], []


def _durations():
    cfg = current_app.config
    return {
        'correct': int(cfg.get('FEEDBACK_CORRECT_MS', 800)),
        'removal': int(cfg.get('CARD_REMOVAL_MS', 400)),
        'incorrect': int(cfg.get('FEEDBACK_INCORRECT_MS', 600)),
    }


def _session_payload(session):
    return {
        'game_code': session.code,
        'state': session.controller.state().to_dict(),
        'score': session.controller.score_snapshot().to_dict(),
        'feedback_pending': session.feedback_pending,
        'durations': _durations(),
    }


@games.route('/create', methods=['POST'])
def create_game():
    records, errors = _load_validated_catalog()
    if records is None:
        current_app.logger.error(f"[session-create] refused: {len(errors)} catalog error(s)")
        return jsonify({'error': 'Poem data is unavailable or invalid', 'errors': errors}), 500
    session = create_session(records)
    current_app.logger.info(f"[session-create] game={session.code} poems={len(records)}")
    return jsonify(_session_payload(session)), 201


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    session = _session_or_404(game_code)
    return jsonify(_session_payload(session))


@games.route('/<string:game_code>/score', methods=['GET'])
def get_score(game_code):
    session = _session_or_404(game_code)
    return jsonify(session.controller.score_snapshot().to_dict())


@games.route('/<string:game_code>/select', methods=['POST'])
def select_card(game_code):
    session = _session_or_404(game_code)
    data = request.get_json(silent=True) or {}
    card_id = data.get('card_id')
    if isinstance(card_id, bool) or not isinstance(card_id, int):
        return jsonify({'error': 'An integer card_id is required'}), 400
    if session.feedback_pending:
        return jsonify({'error': 'Feedback for the previous pick is still running'}), 409

    result = session.controller.select_card(card_id)
    current_app.logger.info(
        f"[select] game={session.code} card={card_id} correct={result.correct} "
        f"round={session.controller.state().current_round}"
    )
    socketio.emit('state_update', {'game_code': session.code}, to=f"game:{session.code}", namespace='/ws')
    schedule_feedback(current_app._get_current_object(), session.code, result)

    payload = result.to_dict()
    payload['state'] = session.controller.state().to_dict()
    payload['score'] = session.controller.score_snapshot().to_dict()
    return jsonify(payload)


@games.route('/<string:game_code>/next', methods=['POST'])
def next_round(game_code):
    session = _session_or_404(game_code)
    if session.feedback_pending:
        return jsonify({'error': 'Feedback for the previous pick is still running'}), 409
    prev_round = session.controller.state().current_round
    advanced = session.controller.next_round()
    if advanced:
        current_app.logger.info(f"[next_round] game={session.code} advance round {prev_round} -> {prev_round + 1}")
    else:
        current_app.logger.info(f"[finish] game={session.code} finished at round={prev_round}")
    socketio.emit('state_update', {'game_code': session.code}, to=f"game:{session.code}", namespace='/ws')
    return jsonify({
        'advanced': advanced,
        'state': session.controller.state().to_dict(),
        'score': session.controller.score_snapshot().to_dict(),
    })


@games.route('/<string:game_code>/replay', methods=['POST'])
def replay_game(game_code):
    session = _session_or_404(game_code)
    if session.feedback_pending:
        return jsonify({'error': 'Feedback for the previous pick is still running'}), 409
    records, errors = _load_validated_catalog()
    if records is None:
        return jsonify({'error': 'Poem data is unavailable or invalid', 'errors': errors}), 500
    restart_session(session, records)
    current_app.logger.info(f"[replay] game={session.code} restarted playthrough={session.playthrough}")
    socketio.emit('state_update', {'game_code': session.code}, to=f"game:{session.code}", namespace='/ws')
    return jsonify(_session_payload(session))


@games.route('/<string:game_code>/leave', methods=['POST'])
def leave_game(game_code):
    session = _session_or_404(game_code)
    end_session_and_notify(session.code)
    return jsonify({'message': 'You have left the game.'}), 200
