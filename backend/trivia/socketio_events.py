from flask_socketio import emit
from flask import current_app, request
from trivia import socketio
from trivia.errors import InvalidPayload, SessionError
from typing import Any, Dict


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _coordinator():
    return current_app.extensions['session_coordinator']


def _payload(data: Any) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _require_text(data: Dict[str, Any], field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise InvalidPayload(f'Invalid payload: {field} is required.')
    return value


def _dispatch(command, *args) -> None:
    """Run a coordinator command, reporting rejections to the caller only."""
    try:
        command(_get_sid(), *args)
    except SessionError as exc:
        current_app.logger.info(f"[rejected] sid={_get_sid()} {type(exc).__name__}: {exc}")
        emit('sessionError', str(exc))


def handle_connect(auth=None):
    current_app.logger.info(f"New client connected {_get_sid()}")


def handle_disconnect(reason=None):
    current_app.logger.info(f"Client disconnected {_get_sid()}")
    _coordinator().disconnect(_get_sid())


def handle_join_session(data: Dict[str, Any] = None):
    data = _payload(data)
    try:
        username = _require_text(data, 'username')
    except InvalidPayload as exc:
        emit('sessionError', str(exc))
        return
    _dispatch(_coordinator().join_session, username, bool(data.get('isGameMaster')))


def handle_set_question(data: Dict[str, Any] = None):
    data = _payload(data)
    try:
        question = _require_text(data, 'question')
        answer = _require_text(data, 'answer')
    except InvalidPayload as exc:
        emit('sessionError', str(exc))
        return
    _dispatch(_coordinator().set_question, question, answer)


def handle_start_game(data: Dict[str, Any] = None):
    _dispatch(_coordinator().start_game)


def handle_submit_guess(data: Dict[str, Any] = None):
    data = _payload(data)
    try:
        guess = _require_text(data, 'guess')
    except InvalidPayload as exc:
        emit('sessionError', str(exc))
        return
    _dispatch(_coordinator().submit_guess, guess)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinSession', handle_join_session, namespace=namespace)
    socketio.on_event('setQuestion', handle_set_question, namespace=namespace)
    socketio.on_event('startGame', handle_start_game, namespace=namespace)
    socketio.on_event('submitGuess', handle_submit_guess, namespace=namespace)
