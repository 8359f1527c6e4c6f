from trivia.session import Player


def normalize_answer(text: str) -> str:
    return text.lower()


def is_correct_guess(guess: str, answer: str) -> bool:
    """Case-insensitive comparison against the stored (already lower-cased) answer."""
    return normalize_answer(guess) == answer


def award_points(player: Player, points: int) -> None:
    player.score += points
