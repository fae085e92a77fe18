from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from poker_ledger.api.errors import api_error, domain_error
from poker_ledger.api.schemas import (
    BuyInRequest,
    BuyInResponse,
    CreateGameRequest,
    FinalRequest,
    FinalResponse,
    GameResponse,
    GameResultsResponse,
    JoinGameRequest,
    JoinGameResponse,
    LedgerSummaryResponse,
    PlayerNameRequest,
    PlayerResponse,
    PlayerResultResponse,
    TransferResponse,
)
from poker_ledger.domain import DomainValidationError
from poker_ledger.runtime import get_service
from poker_ledger.service import LedgerService
from poker_ledger.services.game_codes import GameCodeExhaustedError

router = APIRouter(prefix="/games", tags=["games"])


@router.post(
    "",
    response_model=GameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a game with its first player",
)
def create_game(payload: CreateGameRequest, service: LedgerService = Depends(get_service)) -> GameResponse:
    try:
        game = service.create_game(payload.player_name)
    except GameCodeExhaustedError as exc:
        raise api_error(
            code="game_code_unavailable",
            message=str(exc),
            details={"attempts": exc.attempts},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        ) from exc
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return GameResponse.model_validate(game)


@router.post(
    "/join",
    response_model=JoinGameResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Join an existing game by code",
)
def join_game(payload: JoinGameRequest, service: LedgerService = Depends(get_service)) -> JoinGameResponse:
    try:
        _, player = service.join_game(payload.game_code, payload.player_name)
        game = service.get_game(payload.game_code)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=payload.game_code) from exc
    return JoinGameResponse(
        game=GameResponse.model_validate(game),
        player=PlayerResponse.model_validate(player),
    )


@router.get("/{game_code}", response_model=GameResponse, summary="Get players, buy-ins and finals")
def get_game(game_code: str, service: LedgerService = Depends(get_service)) -> GameResponse:
    try:
        game = service.get_game(game_code)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code) from exc
    return GameResponse.model_validate(game)


@router.post(
    "/{game_code}/players",
    response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a player",
)
def add_player(
    game_code: str,
    payload: PlayerNameRequest,
    service: LedgerService = Depends(get_service),
) -> PlayerResponse:
    try:
        player = service.add_player(game_code, payload.name)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code) from exc
    return PlayerResponse.model_validate(player)


@router.patch("/{game_code}/players/{player_id}", response_model=PlayerResponse, summary="Rename a player")
def rename_player(
    game_code: str,
    player_id: str,
    payload: PlayerNameRequest,
    service: LedgerService = Depends(get_service),
) -> PlayerResponse:
    try:
        player = service.rename_player(game_code, player_id, payload.name)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code, player_id=player_id) from exc
    return PlayerResponse.model_validate(player)


@router.post(
    "/{game_code}/players/{player_id}/buyins",
    response_model=BuyInResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a buy-in",
)
def add_buy_in(
    game_code: str,
    player_id: str,
    payload: BuyInRequest,
    service: LedgerService = Depends(get_service),
) -> BuyInResponse:
    try:
        buy_in = service.add_buy_in(game_code, player_id, payload.amount)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code, player_id=player_id) from exc
    return BuyInResponse.model_validate(buy_in)


@router.delete(
    "/{game_code}/players/{player_id}/buyins/{buy_in_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a buy-in",
)
def delete_buy_in(
    game_code: str,
    player_id: str,
    buy_in_id: str,
    service: LedgerService = Depends(get_service),
) -> Response:
    try:
        service.delete_buy_in(game_code, player_id, buy_in_id)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code, player_id=player_id, buy_in_id=buy_in_id) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{game_code}/players/{player_id}/final",
    response_model=FinalResponse,
    summary="Set or replace a player's final cashout",
)
def set_final(
    game_code: str,
    player_id: str,
    payload: FinalRequest,
    service: LedgerService = Depends(get_service),
) -> FinalResponse:
    try:
        final = service.set_final(game_code, player_id, payload.amount)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code, player_id=player_id) from exc
    return FinalResponse.model_validate(final)


@router.get(
    "/{game_code}/results",
    response_model=GameResultsResponse,
    summary="Net results and the transfers that settle them",
)
def get_results(game_code: str, service: LedgerService = Depends(get_service)) -> GameResultsResponse:
    try:
        results = service.get_results(game_code)
    except DomainValidationError as exc:
        raise domain_error(exc, game_code=game_code) from exc

    names = {player.player_id: player.name for player in results.players}
    summary = results.summary
    return GameResultsResponse(
        game_code=results.game_code,
        results=[
            PlayerResultResponse(
                player_id=player.player_id,
                name=player.name,
                total_buy_ins=player.total_buy_ins,
                final=player.final,
                net=player.net,
            )
            for player in results.players
        ],
        summary=LedgerSummaryResponse(
            total_buy_ins=summary.total_buy_ins,
            total_finals=summary.total_finals,
            discrepancy=summary.discrepancy,
            is_balanced=summary.is_balanced,
            all_finals_entered=summary.all_finals_entered,
            total_winnings=summary.total_winnings,
            total_losses=summary.total_losses,
        ),
        transfers=[
            TransferResponse(
                from_id=transfer.from_id,
                to_id=transfer.to_id,
                from_name=names[transfer.from_id],
                to_name=names[transfer.to_id],
                amount=transfer.amount,
                line=line,
            )
            for transfer, line in zip(results.transfers, results.instructions, strict=True)
        ],
        text=results.text,
    )
