from __future__ import annotations

from collections.abc import Iterable, Mapping

from poker_ledger.domain import SettlementTransfer

DEFAULT_CURRENCY_SYMBOL = "฿"


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format with thousands separators and at most two fraction digits.

    >>> format_currency(1234.5)
    '฿1,234.5'
    >>> format_currency(-50)
    '-฿50'
    """
    rounded = round(float(amount), 2)
    digits = f"{abs(rounded):,.2f}".rstrip("0").rstrip(".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{digits}"


def render_transfer_line(
    transfer: SettlementTransfer,
    names: Mapping[str, str],
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    from_name = names.get(transfer.from_id, transfer.from_id)
    to_name = names.get(transfer.to_id, transfer.to_id)
    return f"{from_name} → {to_name}: {format_currency(transfer.amount, symbol)}"


def render_settlement_text(
    transfers: Iterable[SettlementTransfer],
    names: Mapping[str, str],
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    return "\n".join(render_transfer_line(transfer, names, symbol) for transfer in transfers)
