"""Settlement engine: turn per-player net results into debtor to creditor transfers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

SETTLEMENT_EPSILON = 1e-9


@dataclass(frozen=True)
class PlayerResult:
    player_id: str
    net: float


@dataclass(frozen=True)
class SettlementTransfer:
    from_id: str
    to_id: str
    amount: float


def calculate_settlement(
    results: Iterable[PlayerResult],
    *,
    epsilon: float = SETTLEMENT_EPSILON,
) -> list[SettlementTransfer]:
    """Match the largest debtor with the largest creditor until one side runs out.

    Balances within ``epsilon`` of zero count as settled. Ties keep input order.
    Nets that do not sum to zero leave the remainder unsettled on one side.
    """
    entries = list(results)
    creditors = sorted(
        ([result.player_id, result.net] for result in entries if result.net > epsilon),
        key=lambda item: item[1],
        reverse=True,
    )
    debtors = sorted(
        ([result.player_id, -result.net] for result in entries if result.net < -epsilon),
        key=lambda item: item[1],
        reverse=True,
    )

    transfers: list[SettlementTransfer] = []
    creditor_idx = 0
    debtor_idx = 0
    while creditor_idx < len(creditors) and debtor_idx < len(debtors):
        creditor = creditors[creditor_idx]
        debtor = debtors[debtor_idx]

        amount = min(creditor[1], debtor[1])
        transfers.append(SettlementTransfer(from_id=debtor[0], to_id=creditor[0], amount=amount))

        creditor[1] -= amount
        debtor[1] -= amount

        # `not x > eps` also advances past NaN left behind by inf - inf.
        if not creditor[1] > epsilon:
            creditor_idx += 1
        if not debtor[1] > epsilon:
            debtor_idx += 1

    return transfers
