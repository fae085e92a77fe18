from __future__ import annotations

from fastapi import APIRouter, Depends

from poker_ledger.api.schemas import SettlementRequest, SettlementResponse, SettlementTransferResponse
from poker_ledger.domain import PlayerResult
from poker_ledger.runtime import get_service
from poker_ledger.service import LedgerService

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post("", response_model=SettlementResponse, summary="Settle arbitrary net results")
def settle(payload: SettlementRequest, service: LedgerService = Depends(get_service)) -> SettlementResponse:
    results = [PlayerResult(player_id=item.player_id, net=item.net) for item in payload.results]
    transfers = service.settle(results)
    return SettlementResponse(
        transfers=[
            SettlementTransferResponse(from_id=transfer.from_id, to_id=transfer.to_id, amount=transfer.amount)
            for transfer in transfers
        ],
        unsettled=sum((result.net for result in results), 0.0),
    )
