import logging
import random
import threading
from typing import Optional

from trivia.errors import CapacityUnmet, InvalidSessionState, NotAuthorized
from trivia.session import GameSession, Player
from .scheduler import RoundTimer
from .scoring import award_points, is_correct_guess, normalize_answer


class SessionCoordinator:
    """Owns the trivia session and applies every command to it.

    Each public method holds ``_lock`` for its whole body, so commands from
    different connections and the round timeout never interleave mid-update.
    Rejections raise a ``SessionError`` before anything is mutated.
    """

    def __init__(
        self,
        session: GameSession,
        notifier,
        scheduler,
        rng: Optional[random.Random] = None,
        round_duration: float = 60,
        min_players: int = 3,
        max_attempts: int = 3,
        correct_points: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        self.session = session
        self.notifier = notifier
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.round_duration = round_duration
        self.min_players = min_players
        self.max_attempts = max_attempts
        self.correct_points = correct_points
        self.logger = logger or logging.getLogger(__name__)
        # Assumes the threading async mode, or eventlet/gevent with monkey
        # patching applied; unpatched green threads share one OS thread and
        # would all re-enter this lock.
        self._lock = threading.RLock()

    # ---- Commands ----

    def join_session(self, caller_id: str, username: str, wants_game_master: bool) -> None:
        with self._lock:
            s = self.session
            if s.in_progress:
                raise InvalidSessionState('Game already in progress. Cannot join now.')
            if wants_game_master:
                if s.game_master_id:
                    raise NotAuthorized('A game master is already defined.')
                s.game_master_id = caller_id
            s.players[caller_id] = Player(username)
            self.logger.info(
                f"[join] sid={caller_id} username={username} game_master={bool(wants_game_master)} players={len(s.players)}"
            )
            self._broadcast_players()

    def set_question(self, caller_id: str, question: str, answer: str) -> None:
        with self._lock:
            s = self.session
            if caller_id != s.game_master_id:
                raise NotAuthorized('Only game master can set the question.')
            s.question = question
            s.answer = normalize_answer(answer)
            s.guess_attempts = {}
            self.logger.info(f"[question-set] sid={caller_id}")
            self.notifier.broadcast('questionSet', {'question': s.question})

    def start_game(self, caller_id: str) -> None:
        with self._lock:
            s = self.session
            if caller_id != s.game_master_id:
                raise NotAuthorized('Only game master can start the game.')
            if len(s.players) < self.min_players:
                raise CapacityUnmet(f'Need at least {self.min_players} players to start the game.')
            self._cancel_timer()
            s.in_progress = True
            self.notifier.broadcast('gameStarted', {'question': s.question})
            s.timer = self.scheduler.schedule(self.round_duration, self.expire_round)
            self.logger.info(f"[round-start] players={len(s.players)} duration={self.round_duration}s")

    def submit_guess(self, caller_id: str, guess: str) -> None:
        with self._lock:
            s = self.session
            if not s.in_progress:
                raise InvalidSessionState('Game is not in progress.')
            player = s.players.get(caller_id)
            if player is None:
                raise NotAuthorized('Only joined players can submit guesses.')

            attempts = s.guess_attempts.get(caller_id, 0) + 1
            s.guess_attempts[caller_id] = attempts
            if attempts > self.max_attempts:
                self.notifier.send(caller_id, 'guessResult', {
                    'correct': False,
                    'message': 'No more attempts allowed.',
                })
                return

            if not is_correct_guess(guess, s.answer):
                self.logger.info(f"[guess-wrong] sid={caller_id} attempt={attempts}")
                self.notifier.send(caller_id, 'guessResult', {
                    'correct': False,
                    'message': 'Incorrect guess. Try again if you have attempts remaining.',
                })
                return

            award_points(player, self.correct_points)
            s.in_progress = False
            self._cancel_timer()
            self.logger.info(f"[round-won] winner={player.username} score={player.score}")
            self.notifier.broadcast('gameOver', {
                'message': f'{player.username} answered correctly!',
                'answer': s.answer,
                'winner': player.username,
            })
            self.assign_new_game_master()

    def disconnect(self, caller_id: str) -> None:
        with self._lock:
            s = self.session
            s.players.pop(caller_id, None)
            if caller_id == s.game_master_id:
                if s.players:
                    self.logger.info(f"[master-left] sid={caller_id} remaining={len(s.players)}")
                    self.assign_new_game_master()
                    self.notifier.broadcast('sessionEnded', 'Game master left. A new game master has been assigned.')
                else:
                    self.logger.info(f"[session-end] game master {caller_id} left, no players remain")
                    s.reset()
                    self.notifier.broadcast('sessionEnded', 'Game master left. Session ended.')
            else:
                self._broadcast_players()
                if not s.players:
                    self.logger.info("[session-reset] last player left")
                    s.reset()

    # ---- Timer ----

    def expire_round(self, timer: Optional[RoundTimer] = None) -> None:
        """Round timeout. A no-op unless the round is still open."""
        with self._lock:
            s = self.session
            if timer is not None and timer is not s.timer:
                self.logger.info("[timer-skip] stale round timer fired")
                return
            if not s.in_progress:
                return
            s.in_progress = False
            s.timer = None
            self.logger.info("[round-timeout] time expired")
            self.notifier.broadcast('gameOver', {'message': 'Time expired', 'answer': s.answer})
            self.assign_new_game_master()

    # ---- Succession ----

    def assign_new_game_master(self) -> None:
        with self._lock:
            s = self.session
            if not s.players:
                s.reset()
                return
            new_master = self.rng.choice(list(s.players))
            s.game_master_id = new_master
            self.logger.info(f"[master-assigned] sid={new_master} username={s.players[new_master].username}")
            self.notifier.send(new_master, 'becomeGameMaster')
            self._broadcast_players()

    def snapshot(self) -> dict:
        with self._lock:
            return self.session.to_dict()

    # ---- Helpers ----

    def _cancel_timer(self) -> None:
        if self.session.timer is not None:
            self.session.timer.cancel()
            self.session.timer = None

    def _broadcast_players(self) -> None:
        self.notifier.broadcast('updatePlayers', self.session.player_list())
