from datetime import datetime, timezone
from typing import Optional

from ..models import CategoryTotal, Split, SpendingSummary
from .totals import get_receipt_total

UNCATEGORIZED = "Uncategorized"


def get_this_month_start(now: Optional[datetime] = None) -> int:
    """
    First instant of the current UTC calendar month, in epoch milliseconds.

    Args:
        now: Clock override; defaults to the current time
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    start = now.astimezone(timezone.utc).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return int(start.timestamp()) * 1000


def get_splits_this_month(splits: list[Split], now: Optional[datetime] = None) -> list[Split]:
    """Splits last touched this month (updated_at, falling back to created_at)."""
    start = get_this_month_start(now)
    return [
        split for split in splits
        if (split.updated_at if split.updated_at is not None else split.created_at) >= start
    ]


def get_user_share_cents(split: Split) -> int:
    """
    The current user's share of a split, as an equal split of the total.

    This deliberately ignores item assignments. Zero when the user is
    excluded from the split or it has no participants.
    """
    if split.exclude_me:
        return 0
    participant_count = len(split.participants)
    if participant_count == 0:
        return 0
    return get_receipt_total(split) // participant_count


def get_total_spending_cents(splits: list[Split]) -> int:
    """Gross spend: the sum of every split's receipt total."""
    return sum(get_receipt_total(split) for split in splits)


def get_user_spending_cents(splits: list[Split]) -> int:
    return sum(get_user_share_cents(split) for split in splits)


def get_category_totals(splits: list[Split]) -> list[CategoryTotal]:
    """
    The user's spending grouped by category, largest first.

    Splits without a category are grouped under "Uncategorized". Percent is
    relative to the user's total spending, or 0 when that total is 0.
    """
    total_user_cents = get_user_spending_cents(splits)
    by_category: dict[str, int] = {}

    for split in splits:
        category = split.category or UNCATEGORIZED
        by_category[category] = by_category.get(category, 0) + get_user_share_cents(split)

    totals = [
        CategoryTotal(
            category=category,
            cents=cents,
            percent=(cents / total_user_cents) * 100 if total_user_cents > 0 else 0.0,
        )
        for category, cents in by_category.items()
    ]
    return sorted(totals, key=lambda total: total.cents, reverse=True)


def summarize_spending(splits: list[Split]) -> SpendingSummary:
    """Bundle the spending totals for a collection of splits."""
    return SpendingSummary(
        split_count=len(splits),
        total_spending_cents=get_total_spending_cents(splits),
        user_spending_cents=get_user_spending_cents(splits),
        categories=get_category_totals(splits),
    )
