from ..models import Item, Split
from .money import to_cents


def get_item_cost(item: Item) -> int:
    """Line cost of an item in cents (unit price times quantity)."""
    return to_cents(item.price_in_cents) * to_cents(item.quantity)


def get_items_subtotal(split: Split) -> int:
    """Sum of all item line costs, before tax and tip."""
    return sum(get_item_cost(item) for item in split.items)


def get_receipt_total(split: Split) -> int:
    """
    Get the total receipt amount in cents.

    Items plus tax plus tip. Every operand is coerced through to_cents, so
    malformed values count as zero instead of poisoning the total.
    """
    return get_items_subtotal(split) + to_cents(split.tax_in_cents) + to_cents(split.tip_in_cents)
