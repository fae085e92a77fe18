from __future__ import annotations

import random
import string
from collections.abc import Callable

from poker_ledger.domain.ledger import GAME_CODE_LENGTH

GAME_CODE_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_ATTEMPTS = 100

_system_random = random.SystemRandom()


class GameCodeExhaustedError(RuntimeError):
    """Raised when no free game code was found within the attempt budget."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"failed to generate a unique game code after {attempts} attempts")
        self.attempts = attempts


def generate_game_code(rng: random.Random | None = None) -> str:
    chooser = rng or _system_random
    return "".join(chooser.choice(GAME_CODE_ALPHABET) for _ in range(GAME_CODE_LENGTH))


def generate_unique_game_code(
    exists: Callable[[str], bool],
    *,
    attempts: int = DEFAULT_ATTEMPTS,
    rng: random.Random | None = None,
) -> str:
    for _ in range(attempts):
        code = generate_game_code(rng)
        if not exists(code):
            return code
    raise GameCodeExhaustedError(attempts)
