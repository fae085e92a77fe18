from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from poker_ledger.config import LedgerConfig
from poker_ledger.domain import (
    LedgerNotFoundError,
    LedgerSummary,
    PlayerLedger,
    PlayerResult,
    SettlementTransfer,
    calculate_settlement,
    normalize_game_code,
    normalize_player_name,
    summarize_ledger,
    validate_buy_in_amount,
    validate_final_amount,
)
from poker_ledger.logging_utils import get_logger
from poker_ledger.services.formatting import render_settlement_text, render_transfer_line
from poker_ledger.services.game_codes import GameCodeExhaustedError, generate_unique_game_code
from poker_ledger.storage.repository import BuyInRow, FinalRow, GameRow, LedgerRepository, PlayerRow

logger = get_logger(__name__)


@dataclass(slots=True)
class GameResults:
    game_code: str
    players: list[PlayerLedger]
    summary: LedgerSummary
    transfers: list[SettlementTransfer]
    instructions: list[str]
    text: str


class LedgerService:
    def __init__(self, repo: LedgerRepository, config: LedgerConfig | None = None) -> None:
        self.repo = repo
        self.config = config or LedgerConfig()

    def create_game(self, player_name: str) -> GameRow:
        name = normalize_player_name(player_name)
        attempts = self.config.game_code_attempts
        for _ in range(attempts):
            code = generate_unique_game_code(self.repo.code_exists, attempts=attempts)
            game = self.repo.create_game(code, name)
            if game is not None:
                logger.info("created game %s for %s", game.game_code, name)
                return game
            logger.warning("game code %s was taken concurrently, retrying", code)
        raise GameCodeExhaustedError(attempts)

    def join_game(self, game_code: str, player_name: str) -> tuple[GameRow, PlayerRow]:
        game = self.get_game(game_code)
        player = self.repo.add_player(game.id, normalize_player_name(player_name))
        logger.info("player %s joined game %s", player.id, game.game_code)
        return game, player

    def get_game(self, game_code: str) -> GameRow:
        code = normalize_game_code(game_code)
        game = self.repo.get_game(code)
        if game is None:
            raise LedgerNotFoundError(f"game not found: {code}")
        return game

    def add_player(self, game_code: str, name: str) -> PlayerRow:
        _, player = self.join_game(game_code, name)
        return player

    def rename_player(self, game_code: str, player_id: str, name: str) -> PlayerRow:
        game = self.get_game(game_code)
        player = self.repo.rename_player(game.id, player_id, normalize_player_name(name))
        if player is None:
            raise LedgerNotFoundError(f"player not found: {player_id}")
        return player

    def add_buy_in(self, game_code: str, player_id: str, amount: float) -> BuyInRow:
        player = self._player_or_raise(game_code, player_id)
        buy_in = self.repo.add_buy_in(player.id, validate_buy_in_amount(amount))
        logger.debug("buy-in %s of %s recorded for player %s", buy_in.id, buy_in.amount, player.id)
        return buy_in

    def delete_buy_in(self, game_code: str, player_id: str, buy_in_id: str) -> None:
        player = self._player_or_raise(game_code, player_id)
        if not self.repo.delete_buy_in(player.id, buy_in_id):
            raise LedgerNotFoundError(f"buy-in not found: {buy_in_id}")
        logger.debug("buy-in %s removed for player %s", buy_in_id, player.id)

    def set_final(self, game_code: str, player_id: str, amount: float) -> FinalRow:
        player = self._player_or_raise(game_code, player_id)
        final = self.repo.set_final(player.id, validate_final_amount(amount))
        logger.debug("final of %s set for player %s", final.amount, player.id)
        return final

    def get_results(self, game_code: str) -> GameResults:
        game = self.get_game(game_code)
        ledgers = build_player_ledgers(game)
        summary = summarize_ledger(ledgers)
        if not summary.is_balanced:
            logger.warning(
                "game %s does not balance: finals %.2f vs buy-ins %.2f",
                game.game_code,
                summary.total_finals,
                summary.total_buy_ins,
            )

        transfers = self.settle(ledger.to_result() for ledger in ledgers)
        names = {ledger.player_id: ledger.name for ledger in ledgers}
        return GameResults(
            game_code=game.game_code,
            players=ledgers,
            summary=summary,
            transfers=transfers,
            instructions=[
                render_transfer_line(transfer, names, self.config.currency_symbol) for transfer in transfers
            ],
            text=render_settlement_text(transfers, names, self.config.currency_symbol),
        )

    def settle(self, results: Iterable[PlayerResult]) -> list[SettlementTransfer]:
        return calculate_settlement(results, epsilon=self.config.settlement_epsilon)

    def _player_or_raise(self, game_code: str, player_id: str) -> PlayerRow:
        game = self.get_game(game_code)
        player = self.repo.get_player(game.id, player_id)
        if player is None:
            raise LedgerNotFoundError(f"player not found: {player_id}")
        return player


def build_player_ledgers(game: GameRow) -> list[PlayerLedger]:
    buy_ins: dict[str, list[float]] = {player.id: [] for player in game.players}
    for buy_in in game.buy_ins:
        buy_ins.setdefault(buy_in.player_id, []).append(buy_in.amount)
    finals = {final.player_id: final.amount for final in game.finals}

    return [
        PlayerLedger(
            player_id=player.id,
            name=player.name,
            buy_ins=tuple(buy_ins[player.id]),
            final=finals.get(player.id),
        )
        for player in game.players
    ]
