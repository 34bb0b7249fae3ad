import logging
import math
from fractions import Fraction
from typing import Iterable, Optional

from ..models import Item, ItemizedCost, ParticipantBreakdown, Split
from .money import safe_number, to_cents
from .totals import get_item_cost

logger = logging.getLogger(__name__)

UNNAMED_ITEM = "Unnamed item"


def distribute_remainder(amounts: dict[str, int], remainder: int, participant_ids: Iterable[str]) -> None:
    """
    Hand out leftover cents one at a time, in ascending participant id order.

    If there are more cents than ids the deal wraps around the sorted list
    until every cent is placed. Mutates amounts in place.
    """
    sorted_ids = sorted(set(participant_ids))
    if remainder <= 0 or not sorted_ids:
        return

    full_rounds, extra = divmod(remainder, len(sorted_ids))
    for index, participant_id in enumerate(sorted_ids):
        bonus = full_rounds + (1 if index < extra else 0)
        amounts[participant_id] = amounts.get(participant_id, 0) + bonus


def _participant_ids(split: Split) -> list[str]:
    """Participant ids in split order, first occurrence wins."""
    seen: dict[str, None] = {}
    for participant in split.participants:
        seen.setdefault(participant.id, None)
    return list(seen)


def _item_shares(item: Item, known_ids: set[str]) -> dict[str, Fraction]:
    """Shares per participant for an item, duplicates summed, strangers dropped."""
    shares: dict[str, Fraction] = {}
    for assignment in item.assignments:
        if assignment.participant_id not in known_ids:
            continue
        weight = Fraction(safe_number(assignment.shares))
        shares[assignment.participant_id] = shares.get(assignment.participant_id, Fraction(0)) + weight
    return shares


def _cost_per_share(item: Item, shares: dict[str, Fraction]) -> Optional[int]:
    """Whole cents per share, or None when the item has nothing to split by."""
    total_shares = sum(shares.values(), Fraction(0))
    if total_shares <= 0:
        return None
    return math.floor(get_item_cost(item) / total_shares)


def calculate_item_costs(split: Split) -> dict[str, int]:
    """
    Allocate each item's cost among its assignees by share.

    Each assignee gets floor(cost_per_share * shares); the cents lost to
    flooring go to the assignees in ascending id order. Items with no
    assignments or zero total shares are skipped.

    Returns:
        Dict mapping every participant id to their item cost in cents
    """
    participant_ids = _participant_ids(split)
    known_ids = set(participant_ids)
    costs = {participant_id: 0 for participant_id in participant_ids}

    for item in split.items:
        shares = _item_shares(item, known_ids)
        cost_per_share = _cost_per_share(item, shares)
        if cost_per_share is None:
            continue

        allocated = 0
        for participant_id, weight in shares.items():
            base = math.floor(cost_per_share * weight)
            costs[participant_id] += base
            allocated += base

        distribute_remainder(costs, get_item_cost(item) - allocated, shares.keys())

    return costs


def allocate_proportionally(amount: int, weights: dict[str, int]) -> dict[str, int]:
    """
    Split amount across every key of weights in proportion to its weight.

    Each participant gets floor(weight * amount / total_weight), then the
    leftover cents go out in ascending id order across all participants,
    including those with zero weight. With no weight at all, everyone
    gets zero.
    """
    allocation = {participant_id: 0 for participant_id in weights}
    total_weight = sum(weights.values())
    if total_weight <= 0 or amount <= 0:
        return allocation

    for participant_id, weight in weights.items():
        allocation[participant_id] = (weight * amount) // total_weight

    distribute_remainder(allocation, amount - sum(allocation.values()), weights.keys())
    return allocation


def calculate_tax_and_tip(split: Split, item_costs: dict[str, int]) -> tuple[dict[str, int], dict[str, int]]:
    """Allocate tax and tip by each participant's share of the item costs."""
    tax = allocate_proportionally(to_cents(split.tax_in_cents), item_costs)
    tip = allocate_proportionally(to_cents(split.tip_in_cents), item_costs)
    return tax, tip


def _itemized_costs(split: Split, participant_id: str, known_ids: set[str]) -> list[ItemizedCost]:
    # Display lines use the floored base only; remainder cents show up in
    # items_total but not here, so the lines can sum a few cents short.
    lines: list[ItemizedCost] = []
    for item in split.items:
        shares = _item_shares(item, known_ids)
        if participant_id not in shares:
            continue
        cost_per_share = _cost_per_share(item, shares)
        if cost_per_share is None:
            continue
        lines.append(ItemizedCost(
            item_name=item.name or UNNAMED_ITEM,
            amount=math.floor(cost_per_share * shares[participant_id]),
        ))
    return lines


def calculate_breakdown(split: Split) -> list[ParticipantBreakdown]:
    """
    Calculate what each participant owes for a split.

    Item costs are split among each item's assignees by share. Tax and tip
    are split across all participants in proportion to their item costs.
    All arithmetic is in whole cents, so when every item is assigned the
    grand totals add up to the receipt total exactly.

    Args:
        split: The split to break down. It is not modified.

    Returns:
        One ParticipantBreakdown per participant, in split order
    """
    item_costs = calculate_item_costs(split)
    tax, tip = calculate_tax_and_tip(split, item_costs)
    known_ids = set(item_costs)

    breakdowns: list[ParticipantBreakdown] = []
    emitted: set[str] = set()
    for participant in split.participants:
        if participant.id in emitted:
            continue
        emitted.add(participant.id)

        items_total = item_costs[participant.id]
        tax_total = tax[participant.id]
        tip_total = tip[participant.id]
        breakdowns.append(ParticipantBreakdown(
            participant_id=participant.id,
            participant_name=participant.name,
            items_total=items_total,
            tax_total=tax_total,
            tip_total=tip_total,
            grand_total=items_total + tax_total + tip_total,
            items=_itemized_costs(split, participant.id, known_ids),
        ))

    logger.debug("Calculated breakdown for split %s across %d participants", split.id, len(breakdowns))
    return breakdowns


def all_items_assigned(split: Split) -> bool:
    """True when every item has at least one assignment."""
    return all(item.assignments for item in split.items)


def get_running_tally(split: Split) -> dict[str, float]:
    """
    Unrounded item cost per participant, for the assignment screen.

    Unlike calculate_item_costs this does no flooring, so values can be
    fractional cents.
    """
    participant_ids = _participant_ids(split)
    known_ids = set(participant_ids)
    tally = {participant_id: 0.0 for participant_id in participant_ids}

    for item in split.items:
        shares = _item_shares(item, known_ids)
        total_shares = sum(shares.values(), Fraction(0))
        if total_shares <= 0:
            continue
        total_cost = get_item_cost(item)
        for participant_id, weight in shares.items():
            tally[participant_id] += float(total_cost * weight / total_shares)

    return tally
