import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///piste.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Bout clock (seconds)
    BOUT_DEFAULT_TIME_SEC = float(os.environ.get('BOUT_DEFAULT_TIME_SEC', '180'))
    CLOCK_INTERVAL_SEC = float(os.environ.get('CLOCK_INTERVAL_SEC', '0.1'))
    # Optional: debounce referee touch buttons (ms). 0 disables.
    CONTROLLER_DEBOUNCE_MS = int(os.environ.get('CONTROLLER_DEBOUNCE_MS', '0'))
    # Comma-separated list of scoreboard / referee UI origins
    ALLOWED_ORIGINS = [
        o.strip() for o in os.environ.get(
            'ALLOWED_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]
