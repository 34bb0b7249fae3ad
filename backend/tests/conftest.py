import pytest

from receiptsplit.models import Item, ItemAssignment, Participant, Split


def make_item(item_id, price_in_cents, assignments=(), quantity=1, name=None):
    """Build an Item from (participant_id, shares) pairs."""
    return Item(
        id=item_id,
        name=name if name is not None else item_id,
        price_in_cents=price_in_cents,
        quantity=quantity,
        assignments=[ItemAssignment(participant_id=pid, shares=shares) for pid, shares in assignments],
    )


def make_split(participants, items=(), tax=0, tip=0, **kwargs):
    """Build a Split from (id, name) participant pairs and Items."""
    return Split(
        id=kwargs.pop("id", "s1"),
        name=kwargs.pop("name", "Dinner"),
        created_at=kwargs.pop("created_at", 0),
        participants=[Participant(id=pid, name=name) for pid, name in participants],
        items=list(items),
        tax_in_cents=tax,
        tip_in_cents=tip,
        **kwargs,
    )


@pytest.fixture
def sample_participants():
    """Three test participants."""
    return [("p1", "Alice"), ("p2", "Bob"), ("p3", "Carol")]


@pytest.fixture
def sample_items():
    """Three items totaling $100, all assigned."""
    return [
        # Alice and Bob split equally
        make_item("li1", 4000, [("p1", 1), ("p2", 1)], name="Dinner"),
        # Bob gets 2/3, Carol gets 1/3
        make_item("li2", 3000, [("p2", 2), ("p3", 1)], name="Drinks"),
        # Everyone shares dessert
        make_item("li3", 1000, [("p1", 1), ("p2", 1), ("p3", 1)], quantity=3, name="Dessert"),
    ]


@pytest.fixture
def sample_split(sample_participants, sample_items):
    """A fully assigned $100 receipt with $8.25 tax and $15 tip."""
    return make_split(sample_participants, sample_items, tax=825, tip=1500)
