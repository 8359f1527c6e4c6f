from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import random
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config, scheduler=None, rng=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', [])
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from trivia.session import GameSession
    from trivia.services.games.coordinator import SessionCoordinator
    from trivia.services.games.notifier import SocketIONotifier
    from trivia.services.games.scheduler import SocketIOScheduler

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    coordinator = SessionCoordinator(
        GameSession(),
        notifier=SocketIONotifier(socketio, namespace=namespace),
        scheduler=scheduler or SocketIOScheduler(socketio),
        rng=rng or random.Random(),
        round_duration=flask_app.config.get('ROUND_DURATION_SEC', 60),
        min_players=flask_app.config.get('MIN_PLAYERS', 3),
        max_attempts=flask_app.config.get('MAX_GUESS_ATTEMPTS', 3),
        correct_points=flask_app.config.get('CORRECT_GUESS_POINTS', 10),
        logger=flask_app.logger,
    )
    flask_app.extensions['session_coordinator'] = coordinator

    # Import and register blueprints here
    from trivia.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from trivia.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
