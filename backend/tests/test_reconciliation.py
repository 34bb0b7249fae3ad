"""Tests for reconciliation, shareable text and the split summary."""

import logging

from receiptsplit.models import ParticipantBreakdown
from receiptsplit.services.allocation import calculate_breakdown
from receiptsplit.services.reconciliation import (
    generate_shareable_text,
    summarize_split,
    verify_reconciliation,
)

from conftest import make_item, make_split


class TestVerifyReconciliation:
    """Tests for the money-conservation check."""

    def test_fully_assigned_split_reconciles(self, sample_split):
        """A fully assigned split should reconcile."""
        breakdowns = calculate_breakdown(sample_split)
        assert verify_reconciliation(sample_split, breakdowns) is True

    def test_empty_split_reconciles(self):
        """An empty split should reconcile at zero."""
        split = make_split([("me", "Me")])
        assert verify_reconciliation(split, calculate_breakdown(split)) is True

    def test_unassigned_item_does_not_reconcile(self):
        """An unassigned item leaves money unallocated."""
        split = make_split([("p1", "Alice")], [make_item("i1", 500), make_item("i2", 1000, [("p1", 1)])])
        assert verify_reconciliation(split, calculate_breakdown(split)) is False

    def test_tampered_breakdowns_do_not_reconcile(self, sample_split):
        """An extra cent in the breakdowns should fail the check."""
        breakdowns = calculate_breakdown(sample_split)
        breakdowns.append(ParticipantBreakdown(
            participant_id="x",
            participant_name="Extra",
            items_total=1,
            tax_total=0,
            tip_total=0,
            grand_total=1,
        ))
        assert verify_reconciliation(sample_split, breakdowns) is False


class TestGenerateShareableText:
    """Tests for the plain-text breakdown."""

    def test_full_text(self):
        """The text should match the expected layout line for line."""
        split = make_split(
            [("p1", "Alice"), ("p2", "Bob")],
            [
                make_item("i1", 3000, [("p1", 1)], name="Steak"),
                make_item("i2", 1000, [("p2", 1)], name="Salad"),
            ],
            tax=400,
            tip=0,
            name="Friday dinner",
        )
        text = generate_shareable_text(split, calculate_breakdown(split))

        assert text == (
            "💰 Friday dinner\n"
            "\n"
            "Alice:\n"
            "  Steak: $30.00\n"
            "  Tax: $3.00\n"
            "  Total: $33.00\n"
            "\n"
            "Bob:\n"
            "  Salad: $10.00\n"
            "  Tax: $1.00\n"
            "  Total: $11.00\n"
            "\n"
            "Receipt Total: $44.00"
        )

    def test_zero_tax_and_tip_lines_are_omitted(self):
        """Zero tax and tip should not get their own lines."""
        split = make_split([("p1", "Alice")], [make_item("i1", 500, [("p1", 1)], name="Tea")])
        text = generate_shareable_text(split, calculate_breakdown(split))

        assert "Tax:" not in text
        assert "Tip:" not in text

    def test_tip_line_present_when_non_zero(self):
        """A non-zero tip should get its own line."""
        split = make_split([("p1", "Alice")], [make_item("i1", 500, [("p1", 1)])], tip=75)
        text = generate_shareable_text(split, calculate_breakdown(split))
        assert "  Tip: $0.75\n" in text

    def test_default_title(self):
        """An unnamed split should use the default title."""
        split = make_split([], name="")
        assert generate_shareable_text(split, []) == "💰 Split Summary\n\nReceipt Total: $0.00"

    def test_follows_breakdown_order(self, sample_split):
        """Blocks should follow the order of the breakdowns given."""
        breakdowns = list(reversed(calculate_breakdown(sample_split)))
        text = generate_shareable_text(sample_split, breakdowns)
        assert text.index("Carol:") < text.index("Bob:") < text.index("Alice:")

    def test_is_deterministic(self, sample_split):
        """Same input should give the same text."""
        breakdowns = calculate_breakdown(sample_split)
        assert generate_shareable_text(sample_split, breakdowns) == generate_shareable_text(sample_split, breakdowns)


class TestSummarizeSplit:
    """Tests for the bundled summary."""

    def test_summary_fields(self, sample_split):
        """The summary should carry every derived value."""
        summary = summarize_split(sample_split)

        assert summary.receipt_total == 12325
        assert summary.items_subtotal == 10000
        assert summary.is_reconciled is True
        assert summary.all_items_assigned is True
        assert len(summary.breakdowns) == 3
        assert summary.shareable_text.startswith("💰 Dinner")
        assert sum(summary.running_tally.values()) == 10000

    def test_logs_warning_when_not_reconciled(self, caplog):
        """An unreconciled split should log a warning."""
        split = make_split([("p1", "Alice")], [make_item("i1", 500)])

        with caplog.at_level(logging.WARNING, logger="receiptsplit.services.reconciliation"):
            summary = summarize_split(split)

        assert summary.is_reconciled is False
        assert summary.all_items_assigned is False
        assert "does not reconcile" in caplog.text
