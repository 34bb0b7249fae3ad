from pydantic import BaseModel, field_validator
from typing import Literal, Optional

from .services.money import safe_number, to_cents


SplitCategory = Literal["Restaurant", "Grocery", "Entertainment", "Utilities", "Other"]
SplitStep = Literal["receipt", "people", "assign", "summary", "export"]


class ItemAssignment(BaseModel):
    """A participant's weighted claim on one item."""
    participant_id: str
    shares: float = 1

    @field_validator("shares", mode="before")
    @classmethod
    def _coerce_shares(cls, v) -> float:
        return safe_number(v)


class Item(BaseModel):
    """One receipt line. Price is per unit."""
    id: str
    name: str = ""
    price_in_cents: int = 0
    quantity: int = 0
    assignments: list[ItemAssignment] = []

    @field_validator("price_in_cents", "quantity", mode="before")
    @classmethod
    def _coerce_amounts(cls, v) -> int:
        return to_cents(v)


class Participant(BaseModel):
    """A person taking part in a split."""
    id: str
    name: str
    source: Optional[Literal["friend", "temp"]] = None


class Split(BaseModel):
    """A receipt being divided. Timestamps are epoch milliseconds."""
    id: str
    name: str = ""
    created_at: int = 0
    updated_at: Optional[int] = None
    items: list[Item] = []
    participants: list[Participant] = []
    tax_in_cents: int = 0
    tip_in_cents: int = 0
    current_step: SplitStep = "receipt"
    category: Optional[SplitCategory] = None
    exclude_me: bool = False

    @field_validator("tax_in_cents", "tip_in_cents", mode="before")
    @classmethod
    def _coerce_amounts(cls, v) -> int:
        return to_cents(v)


class ItemizedCost(BaseModel):
    """One display line in a participant's breakdown."""
    item_name: str
    amount: int


class ParticipantBreakdown(BaseModel):
    """What one participant owes, in cents."""
    participant_id: str
    participant_name: str
    items_total: int
    tax_total: int
    tip_total: int
    grand_total: int
    items: list[ItemizedCost] = []


class SplitSummary(BaseModel):
    """Everything the summary screen derives from a split."""
    breakdowns: list[ParticipantBreakdown]
    receipt_total: int
    items_subtotal: int
    is_reconciled: bool
    shareable_text: str
    all_items_assigned: bool
    running_tally: dict[str, float]


class CategoryTotal(BaseModel):
    """The user's spending in one category."""
    category: str
    cents: int
    percent: float


class SpendingSummary(BaseModel):
    """Spending totals over a collection of splits."""
    split_count: int
    total_spending_cents: int
    user_spending_cents: int
    categories: list[CategoryTotal]


class SplitCreate(BaseModel):
    """Request body for creating a new split."""
    name: Optional[str] = None


class MoneyParseRequest(BaseModel):
    """Request body for converting a typed money string."""
    text: str


class MoneyParseResponse(BaseModel):
    """Result of converting a typed money string."""
    valid: bool
    cents: int
    display: str


class MoneyFormatResponse(BaseModel):
    """Display forms of a cents amount."""
    cents: int
    input_value: str
    currency: str
