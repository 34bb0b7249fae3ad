import logging

from ..models import ParticipantBreakdown, Split, SplitSummary
from .allocation import all_items_assigned, calculate_breakdown, get_running_tally
from .money import format_currency
from .totals import get_items_subtotal, get_receipt_total

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Split Summary"


def verify_reconciliation(split: Split, breakdowns: list[ParticipantBreakdown]) -> bool:
    """Check that the breakdown grand totals add up to the receipt total."""
    return get_receipt_total(split) == sum(b.grand_total for b in breakdowns)


def generate_shareable_text(split: Split, breakdowns: list[ParticipantBreakdown]) -> str:
    """
    Render a plain-text breakdown suitable for pasting into a message.

    One block per breakdown, in the order given. Tax and tip lines only
    appear when non-zero. Amounts always use the fixed "$D.DD" form.
    """
    lines = [f"💰 {split.name or DEFAULT_TITLE}", ""]

    for breakdown in breakdowns:
        lines.append(f"{breakdown.participant_name}:")
        for item in breakdown.items:
            lines.append(f"  {item.item_name}: {format_currency(item.amount)}")
        if breakdown.tax_total > 0:
            lines.append(f"  Tax: {format_currency(breakdown.tax_total)}")
        if breakdown.tip_total > 0:
            lines.append(f"  Tip: {format_currency(breakdown.tip_total)}")
        lines.append(f"  Total: {format_currency(breakdown.grand_total)}")
        lines.append("")

    lines.append(f"Receipt Total: {format_currency(get_receipt_total(split))}")
    return "\n".join(lines)


def summarize_split(split: Split) -> SplitSummary:
    """
    Derive everything the summary screen shows for a split.

    Logs a warning when the breakdown does not reconcile, which happens
    when some item cost has nobody to carry it.
    """
    breakdowns = calculate_breakdown(split)
    is_reconciled = verify_reconciliation(split, breakdowns)
    if not is_reconciled:
        logger.warning(
            "Split %s does not reconcile: receipt total %d, allocated %d",
            split.id,
            get_receipt_total(split),
            sum(b.grand_total for b in breakdowns),
        )

    return SplitSummary(
        breakdowns=breakdowns,
        receipt_total=get_receipt_total(split),
        items_subtotal=get_items_subtotal(split),
        is_reconciled=is_reconciled,
        shareable_text=generate_shareable_text(split, breakdowns),
        all_items_assigned=all_items_assigned(split),
        running_tally=get_running_tally(split),
    )
