from typing import Dict, List, Optional


class Player:
    def __init__(self, username: str, score: int = 0):
        self.username = username
        self.score = score

    def to_dict(self):
        return {
            'username': self.username,
            'score': self.score,
        }


class GameSession:
    """The one in-memory trivia session served by this process.

    A freshly constructed session is in its initial (empty) form; ``reset``
    puts an existing instance back into that form in place.
    """

    def __init__(self):
        self.game_master_id: Optional[str] = None
        self.question: str = ''
        self.answer: str = ''
        self.in_progress: bool = False
        self.players: Dict[str, Player] = {}
        self.guess_attempts: Dict[str, int] = {}
        self.timer = None

    def reset(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
        self.__init__()

    def is_empty(self) -> bool:
        return (
            self.game_master_id is None
            and not self.question
            and not self.answer
            and not self.in_progress
            and not self.players
            and not self.guess_attempts
            and self.timer is None
        )

    def player_list(self) -> List[dict]:
        return [p.to_dict() for p in self.players.values()]

    def to_dict(self):
        # The answer never leaves the server
        return {
            'players': self.player_list(),
            'playerCount': len(self.players),
            'inProgress': self.in_progress,
            'question': self.question,
            'hasGameMaster': self.game_master_id is not None,
        }
