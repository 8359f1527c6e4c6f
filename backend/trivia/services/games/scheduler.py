from typing import Callable


class RoundTimer:
    """Handle for a single pending round timeout.

    Cancelling only marks the handle; a worker that has already woken up
    checks ``cancelled`` before running the callback, and the callback
    itself re-checks the session state under the coordinator lock.
    """

    def __init__(self, delay: float, callback: Callable[['RoundTimer'], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.cancelled:
            return
        self.callback(self)


class SocketIOScheduler:
    """Run round timeouts on Socket.IO background tasks."""

    def __init__(self, socketio):
        self.socketio = socketio

    def schedule(self, delay: float, callback: Callable[[RoundTimer], None]) -> RoundTimer:
        timer = RoundTimer(delay, callback)

        def _worker(handle: RoundTimer):
            self.socketio.sleep(handle.delay)
            handle.fire()

        self.socketio.start_background_task(_worker, timer)
        return timer
