"""Game domain services: round sequencing, scoring, validation and timers.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics.
"""

from .errors import InvalidArgument
from .records import PoemRecord
from .scoring import ScoreSnapshot, ScoreTracker
from .sequencer import GameState, JudgeResult, RoundSequencer, fisher_yates_shuffle
from .controller import GameController
from .validator import ValidationResult, validate_collection, validate_record

__all__ = [
    'InvalidArgument',
    'PoemRecord',
    'ScoreSnapshot',
    'ScoreTracker',
    'GameState',
    'JudgeResult',
    'RoundSequencer',
    'fisher_yates_shuffle',
    'GameController',
    'ValidationResult',
    'validate_collection',
    'validate_record',
]
