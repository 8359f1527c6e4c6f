import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Round timeout (seconds)
    ROUND_DURATION_SEC = float(os.environ.get('ROUND_DURATION_SEC', '60'))
    # Minimum players to start a round; the game master counts as a player
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '3'))
    # Scoring guesses allowed per player per question
    MAX_GUESS_ATTEMPTS = int(os.environ.get('MAX_GUESS_ATTEMPTS', '3'))
    CORRECT_GUESS_POINTS = int(os.environ.get('CORRECT_GUESS_POINTS', '10'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',')
        if origin.strip()
    ]
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
