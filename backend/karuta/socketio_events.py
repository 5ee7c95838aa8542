from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from karuta import socketio
from karuta.services.games.sessions import GameSession, end_session, get_session
from typing import Dict, Tuple
import time


def handle_connect(auth=None):
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    # On disconnect, if this socket owned the session and no other owner
    # socket remains, end the session for that game code
    sid = _get_sid()
    ctx = _sid_to_game.pop(sid, None)
    if not ctx:
        return
    code, is_session_owner = ctx
    session = get_session(code)
    if not is_session_owner or session is None:
        return
    session.owner_sids.discard(sid)
    if session.owner_sids:
        return
    # In tests, end immediately for determinism; in prod, allow grace period
    if current_app.config.get('TESTING'):
        end_session_and_notify(code)
        return
    _schedule_end(session, float(current_app.config.get('SESSION_END_GRACE_SEC', 2.0)))


def handle_join_game(data):
    game_code = (data or {}).get('game_code')
    is_session_owner = bool((data or {}).get('is_session_owner'))
    if not game_code:
        emit('error', {'message': 'game_code is required'})
        return
    code = game_code.upper()
    room = f"game:{code}"
    join_room(room)
    sid = _get_sid()
    _sid_to_game[sid] = (code, is_session_owner)
    session = get_session(code)
    if is_session_owner and session is not None:
        session.owner_sids.add(sid)
        session.end_deadline = None
    emit('joined', {'room': room})


def handle_leave_game(data):
    game_code = (data or {}).get('game_code')
    if not game_code:
        emit('error', {'message': 'game_code is required'})
        return
    code = game_code.upper()
    room = f"game:{code}"
    leave_room(room)
    emit('left', {'room': room})
    # Explicit quit by the owner ends the session immediately
    session = get_session(code)
    if session is not None and _get_sid() in session.owner_sids:
        end_session_and_notify(code)


def handle_ping(data):
    emit('pong', data or {})

# ---- Session owner lifecycle ----

# sid -> (game code, joined as owner); owner sets and end deadlines live on the GameSession
_sid_to_game: Dict[str, Tuple[str, bool]] = {}


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def end_session_and_notify(game_code: str) -> None:
    """End the session: notify clients and discard the in-memory game."""
    code = game_code.upper()
    # Use socketio.emit since this may be called from a background task
    socketio.emit('session_ended', {'game_code': code}, to=f"game:{code}", namespace='/ws')
    end_session(code)


def _schedule_end(session: GameSession, delay_sec: float = 2.0) -> None:
    deadline = time.time() + delay_sec
    session.end_deadline = deadline

    def _runner(code: str, deadline: float):
        sleep_for = max(0.0, deadline - time.time())
        if sleep_for:
            time.sleep(sleep_for)
        current = get_session(code)
        # a reconnecting owner clears the deadline; a replaced session has its own
        if current is session and not current.owner_sids and current.end_deadline == deadline:
            end_session_and_notify(code)

    socketio.start_background_task(_runner, session.code, deadline)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'disconnect': handle_disconnect,
        'join_game': handle_join_game,
        'leave_game': handle_leave_game,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace=namespace)
