from __future__ import annotations

from fastapi import FastAPI

from poker_ledger.api.games import router as games_router
from poker_ledger.api.settlement import router as settlement_router

app = FastAPI(title="Poker Ledger API")
app.include_router(games_router)
app.include_router(settlement_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
