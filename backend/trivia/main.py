from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the trivia game server!'})

@main.route('/health')
def health():
    return jsonify({'status': 'ok'})

@main.route('/api/session', methods=['GET'])
def get_session_state():
    """
    Returns the public state of the trivia session. The answer is never included.
    """
    coordinator = current_app.extensions['session_coordinator']
    return jsonify(coordinator.snapshot()), 200
