import random
import string
from dataclasses import dataclass, field
import time
from typing import Dict, Optional, Set

from .controller import GameController


@dataclass
class GameSession:
    code: str
    controller: GameController
    created_at: float = field(default_factory=time.time)
    # True while timed feedback for the last pick is still running
    feedback_pending: bool = False
    # Bumped on every replay; timers started in an older playthrough abort
    playthrough: int = 1
    owner_sids: Set[str] = field(default_factory=set)
    end_deadline: Optional[float] = None


_sessions: Dict[str, GameSession] = {}


def generate_session_code(length=4):
    """Generate a unique, short session code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in _sessions:
            return code


def create_session(poems) -> GameSession:
    controller = GameController()
    controller.init_game(poems)
    session = GameSession(code=generate_session_code(), controller=controller)
    _sessions[session.code] = session
    return session


def restart_session(session: GameSession, poems) -> GameSession:
    """Start a new playthrough in an existing session."""
    session.controller.init_game(poems)
    session.playthrough += 1
    session.feedback_pending = False
    return session


def get_session(code: str) -> Optional[GameSession]:
    if not code:
        return None
    return _sessions.get(code.upper())


def end_session(code: str) -> Optional[GameSession]:
    return _sessions.pop(code.upper(), None)


def clear_sessions() -> None:
    _sessions.clear()
