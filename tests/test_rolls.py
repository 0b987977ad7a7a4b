import pytest

from discord_droll.rolls import ROLL_LABELS, lookup_roll


@pytest.mark.parametrize(
    "label, count",
    [
        (":one: :red_circle:", 1),
        (":two:", 2),
        (":three:", 3),
        (":four: :green_circle:", 4),
    ],
)
def test_known_labels_resolve_to_their_count(label, count):
    lookup = lookup_roll(label)

    assert lookup.found is True
    assert lookup.count == count
    assert ROLL_LABELS[label] == count


@pytest.mark.parametrize("label", ["", ":one:", ":five:", "two", ":two: "])
def test_unknown_labels_are_not_found(label):
    lookup = lookup_roll(label)

    assert lookup.found is False
    assert lookup.count is None
    assert lookup.label == label
