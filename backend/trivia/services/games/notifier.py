from typing import Any


class SocketIONotifier:
    """Outbound side of the session: broadcast to everyone or unicast to one sid.

    Uses ``socketio.emit`` rather than ``flask_socketio.emit`` so the same
    calls work from request handlers and from the round timer's background task.
    A ``payload`` of None sends the event with no arguments.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def broadcast(self, event: str, payload: Any = None) -> None:
        args = () if payload is None else (payload,)
        self.socketio.emit(event, *args, namespace=self.namespace)

    def send(self, connection_id: str, event: str, payload: Any = None) -> None:
        args = () if payload is None else (payload,)
        self.socketio.emit(event, *args, to=connection_id, namespace=self.namespace)
