from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .settlement import PlayerResult

GAME_CODE_LENGTH = 5
PLAYER_NAME_MAX_LENGTH = 50
BALANCE_TOLERANCE = 0.01

_GAME_CODE_RE = re.compile(rf"^[A-Z0-9]{{{GAME_CODE_LENGTH}}}$")


class DomainValidationError(ValueError):
    """Raised when a ledger rule is violated."""


class LedgerNotFoundError(DomainValidationError):
    """Raised when a game, player or buy-in does not exist."""


def normalize_player_name(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("player name must be non-empty")
    if len(value) > PLAYER_NAME_MAX_LENGTH:
        raise DomainValidationError(f"player name must be at most {PLAYER_NAME_MAX_LENGTH} characters")
    return value


def normalize_game_code(code: str) -> str:
    value = code.strip().upper()
    if not _GAME_CODE_RE.match(value):
        raise DomainValidationError(
            f"game code must be {GAME_CODE_LENGTH} letters or digits"
        )
    return value


def validate_buy_in_amount(amount: float) -> float:
    if not math.isfinite(amount) or amount <= 0:
        raise DomainValidationError("buy-in amount must be a positive finite number")
    return float(amount)


def validate_final_amount(amount: float) -> float:
    if not math.isfinite(amount) or amount < 0:
        raise DomainValidationError("final amount must be a non-negative finite number")
    return float(amount)


@dataclass(frozen=True)
class PlayerLedger:
    """Everything recorded for one player: buy-ins in order and the cashout, if entered."""

    player_id: str
    name: str
    buy_ins: tuple[float, ...] = field(default_factory=tuple)
    final: float | None = None

    @property
    def total_buy_ins(self) -> float:
        return sum(self.buy_ins, 0.0)

    @property
    def cashout(self) -> float:
        return self.final if self.final is not None else 0.0

    @property
    def net(self) -> float:
        return self.cashout - self.total_buy_ins

    def to_result(self) -> PlayerResult:
        return PlayerResult(player_id=self.player_id, net=self.net)


@dataclass(frozen=True)
class LedgerSummary:
    total_buy_ins: float
    total_finals: float
    discrepancy: float
    all_finals_entered: bool
    total_winnings: float
    total_losses: float

    @property
    def is_balanced(self) -> bool:
        return self.discrepancy <= BALANCE_TOLERANCE


def summarize_ledger(players: Sequence[PlayerLedger]) -> LedgerSummary:
    total_buy_ins = sum((player.total_buy_ins for player in players), 0.0)
    total_finals = sum((player.cashout for player in players), 0.0)
    nets = [player.net for player in players]
    return LedgerSummary(
        total_buy_ins=total_buy_ins,
        total_finals=total_finals,
        discrepancy=abs(total_finals - total_buy_ins),
        all_finals_entered=all(player.final is not None for player in players),
        total_winnings=sum((net for net in nets if net > 0), 0.0),
        total_losses=sum((-net for net in nets if net < 0), 0.0),
    )
