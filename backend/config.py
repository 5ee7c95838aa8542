import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(BASE_DIR, 'karuta.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Poem catalog source used by `flask seed-poems`
    POEMS_PATH = os.environ.get('POEMS_PATH') or os.path.join(BASE_DIR, 'data', 'poems.json')
    # Feedback timing after a judgment (milliseconds)
    FEEDBACK_CORRECT_MS = int(os.environ.get('FEEDBACK_CORRECT_MS', '800'))
    CARD_REMOVAL_MS = int(os.environ.get('CARD_REMOVAL_MS', '400'))
    FEEDBACK_INCORRECT_MS = int(os.environ.get('FEEDBACK_INCORRECT_MS', '600'))
    # Advance to the next reading card once correct-answer feedback ends
    AUTO_ADVANCE = os.environ.get('AUTO_ADVANCE', '1') not in ('0', 'false', 'False')
    # Grace period before a session whose owner disconnected is discarded (sec)
    SESSION_END_GRACE_SEC = float(os.environ.get('SESSION_END_GRACE_SEC', '2.0'))
