from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from poker_ledger.storage.models import BuyIn, Final, Game, Player


@dataclass(slots=True)
class PlayerRow:
    id: str
    game_id: int
    name: str
    created_at: datetime


@dataclass(slots=True)
class BuyInRow:
    id: str
    player_id: str
    amount: float
    created_at: datetime


@dataclass(slots=True)
class FinalRow:
    id: str
    player_id: str
    amount: float
    created_at: datetime


@dataclass(slots=True)
class GameRow:
    id: int
    game_code: str
    created_at: datetime
    players: list[PlayerRow] = field(default_factory=list)
    buy_ins: list[BuyInRow] = field(default_factory=list)
    finals: list[FinalRow] = field(default_factory=list)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _player_row(player: Player) -> PlayerRow:
    return PlayerRow(id=player.id, game_id=player.game_id, name=player.name, created_at=_aware(player.created_at))


def _buy_in_row(buy_in: BuyIn) -> BuyInRow:
    return BuyInRow(
        id=buy_in.id,
        player_id=buy_in.player_id,
        amount=float(buy_in.amount),
        created_at=_aware(buy_in.created_at),
    )


def _final_row(final: Final) -> FinalRow:
    return FinalRow(
        id=final.id,
        player_id=final.player_id,
        amount=float(final.amount),
        created_at=_aware(final.created_at),
    )


class LedgerRepository:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def code_exists(self, game_code: str) -> bool:
        with self._session_factory() as db:
            row = db.execute(
                select(func.count(Game.id)).where(func.upper(Game.game_code) == game_code.upper())
            ).one()
            return bool(row[0])

    def create_game(self, game_code: str, first_player_name: str) -> GameRow | None:
        """Insert a game and its first player; ``None`` when the code is already taken."""
        with self._session_factory() as db:
            game = Game(game_code=game_code)
            db.add(game)
            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                return None
            db.add(Player(game_id=game.id, name=first_player_name, position=0))
            db.commit()
            game_id = game.id

        return self._load_game(game_id)

    def get_game(self, game_code: str) -> GameRow | None:
        with self._session_factory() as db:
            game_id = db.scalar(select(Game.id).where(func.upper(Game.game_code) == game_code.upper()))
        if game_id is None:
            return None
        return self._load_game(game_id)

    def _load_game(self, game_id: int) -> GameRow | None:
        with self._session_factory() as db:
            game = db.get(Game, game_id)
            if game is None:
                return None

            players = db.scalars(
                select(Player).where(Player.game_id == game_id).order_by(Player.position, Player.created_at)
            ).all()
            buy_ins = db.scalars(
                select(BuyIn)
                .join(Player, Player.id == BuyIn.player_id)
                .where(Player.game_id == game_id)
                .order_by(BuyIn.created_at, BuyIn.id)
            ).all()
            finals = db.scalars(
                select(Final)
                .join(Player, Player.id == Final.player_id)
                .where(Player.game_id == game_id)
                .order_by(Player.position)
            ).all()

            return GameRow(
                id=game.id,
                game_code=game.game_code,
                created_at=_aware(game.created_at),
                players=[_player_row(player) for player in players],
                buy_ins=[_buy_in_row(buy_in) for buy_in in buy_ins],
                finals=[_final_row(final) for final in finals],
            )

    def add_player(self, game_id: int, name: str) -> PlayerRow:
        with self._session_factory() as db:
            position = db.scalar(
                select(func.coalesce(func.max(Player.position), -1)).where(Player.game_id == game_id)
            )
            player = Player(game_id=game_id, name=name, position=int(position) + 1)
            db.add(player)
            db.commit()
            return _player_row(player)

    def get_player(self, game_id: int, player_id: str) -> PlayerRow | None:
        with self._session_factory() as db:
            player = db.scalar(select(Player).where(Player.id == player_id, Player.game_id == game_id))
            return _player_row(player) if player is not None else None

    def rename_player(self, game_id: int, player_id: str, name: str) -> PlayerRow | None:
        with self._session_factory() as db:
            player = db.scalar(select(Player).where(Player.id == player_id, Player.game_id == game_id))
            if player is None:
                return None
            player.name = name
            db.commit()
            return _player_row(player)

    def add_buy_in(self, player_id: str, amount: float) -> BuyInRow:
        with self._session_factory() as db:
            buy_in = BuyIn(player_id=player_id, amount=amount)
            db.add(buy_in)
            db.commit()
            return _buy_in_row(buy_in)

    def delete_buy_in(self, player_id: str, buy_in_id: str) -> bool:
        with self._session_factory() as db:
            buy_in = db.scalar(select(BuyIn).where(BuyIn.id == buy_in_id, BuyIn.player_id == player_id))
            if buy_in is None:
                return False
            db.delete(buy_in)
            db.commit()
            return True

    def set_final(self, player_id: str, amount: float) -> FinalRow:
        with self._session_factory() as db:
            final = db.scalar(select(Final).where(Final.player_id == player_id))
            if final is None:
                final = Final(player_id=player_id, amount=amount)
                db.add(final)
            else:
                final.amount = amount
            db.commit()
            return _final_row(final)
