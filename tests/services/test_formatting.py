import pytest

from poker_ledger.domain import SettlementTransfer
from poker_ledger.services.formatting import (
    format_currency,
    render_settlement_text,
    render_transfer_line,
)


@pytest.mark.parametrize(
    "amount, expected",
    [
        (50, "฿50"),
        (1234.5, "฿1,234.5"),
        (1234.567, "฿1,234.57"),
        (0, "฿0"),
        (-50, "-฿50"),
        (1_000_000, "฿1,000,000"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_custom_symbol() -> None:
    assert format_currency(12.3, symbol="$") == "$12.3"


def test_render_transfer_lines() -> None:
    transfers = [
        SettlementTransfer(from_id="p2", to_id="p1", amount=300),
        SettlementTransfer(from_id="p3", to_id="p1", amount=25.5),
    ]
    names = {"p1": "Alice", "p2": "Bob"}

    assert render_transfer_line(transfers[0], names) == "Bob → Alice: ฿300"
    assert render_settlement_text(transfers, names) == "Bob → Alice: ฿300\np3 → Alice: ฿25.5"
