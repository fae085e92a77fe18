from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class CreateGameRequest(BaseModel):
    player_name: str = Field(..., min_length=1, max_length=50, examples=["alice"])


class JoinGameRequest(BaseModel):
    game_code: str = Field(..., examples=["AB12C"])
    player_name: str = Field(..., min_length=1, max_length=50, examples=["bob"])


class PlayerNameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50, examples=["charlie"])


class BuyInRequest(BaseModel):
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Buy-in amount", examples=[500])


class FinalRequest(BaseModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Chips cashed out", examples=[1250])


class PlayerResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    game_id: int
    name: str
    created_at: datetime


class BuyInResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    player_id: str
    amount: float
    created_at: datetime


class FinalResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    player_id: str
    amount: float
    created_at: datetime


class GameResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    game_code: str
    created_at: datetime
    players: list[PlayerResponse]
    buy_ins: list[BuyInResponse]
    finals: list[FinalResponse]


class JoinGameResponse(BaseModel):
    game: GameResponse
    player: PlayerResponse


class PlayerResultResponse(BaseModel):
    player_id: str
    name: str
    total_buy_ins: float
    final: float | None = None
    net: float


class TransferResponse(BaseModel):
    from_id: str
    to_id: str
    from_name: str
    to_name: str
    amount: float
    line: str


class LedgerSummaryResponse(BaseModel):
    total_buy_ins: float
    total_finals: float
    discrepancy: float
    is_balanced: bool
    all_finals_entered: bool
    total_winnings: float
    total_losses: float


class GameResultsResponse(BaseModel):
    game_code: str
    results: list[PlayerResultResponse]
    summary: LedgerSummaryResponse
    transfers: list[TransferResponse]
    text: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "game_code": "AB12C",
                    "results": [
                        {"player_id": "p-1", "name": "alice", "total_buy_ins": 500, "final": 800, "net": 300},
                        {"player_id": "p-2", "name": "bob", "total_buy_ins": 500, "final": 200, "net": -300},
                    ],
                    "summary": {
                        "total_buy_ins": 1000,
                        "total_finals": 1000,
                        "discrepancy": 0,
                        "is_balanced": True,
                        "all_finals_entered": True,
                        "total_winnings": 300,
                        "total_losses": 300,
                    },
                    "transfers": [
                        {
                            "from_id": "p-2",
                            "to_id": "p-1",
                            "from_name": "bob",
                            "to_name": "alice",
                            "amount": 300,
                            "line": "bob → alice: ฿300",
                        }
                    ],
                    "text": "bob → alice: ฿300",
                }
            ]
        }
    }


class PlayerResultRequest(BaseModel):
    player_id: str = Field(..., min_length=1)
    net: float = Field(..., allow_inf_nan=False)


class SettlementRequest(BaseModel):
    results: list[PlayerResultRequest] = Field(
        default_factory=list,
        description="Net result per player; nets are expected to sum to zero",
    )

    @model_validator(mode="after")
    def validate_unique_players(self) -> "SettlementRequest":
        player_ids = [result.player_id for result in self.results]
        if len(set(player_ids)) != len(player_ids):
            raise ValueError("player ids must be unique")
        return self


class SettlementTransferResponse(BaseModel):
    from_id: str
    to_id: str
    amount: float


class SettlementResponse(BaseModel):
    transfers: list[SettlementTransferResponse]
    unsettled: float = Field(..., description="Sum of nets; non-zero means the input did not balance")
