from fastapi import APIRouter, Query

from ..models import MoneyFormatResponse, MoneyParseRequest, MoneyParseResponse
from ..services.money import (
    cents_to_money_string,
    format_currency,
    is_valid_money_input,
    money_string_to_cents,
)

router = APIRouter(prefix="/money", tags=["Money"])


@router.post("/parse", response_model=MoneyParseResponse)
async def parse_money(request: MoneyParseRequest) -> MoneyParseResponse:
    """
    Convert a typed money string to cents.

    The conversion is attempted even when the text is not a valid entry,
    so callers can decide whether to accept the keystroke.
    """
    cents = money_string_to_cents(request.text)
    return MoneyParseResponse(
        valid=is_valid_money_input(request.text),
        cents=cents,
        display=cents_to_money_string(cents),
    )


@router.get("/format", response_model=MoneyFormatResponse)
async def format_money(cents: int = Query(..., description="Amount in cents")) -> MoneyFormatResponse:
    """Format a cents amount for an input field and for display."""
    return MoneyFormatResponse(
        cents=cents,
        input_value=cents_to_money_string(cents),
        currency=format_currency(cents),
    )
