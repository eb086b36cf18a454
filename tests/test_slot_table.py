import itertools

import pytest

from restaurant_reservation import (
    AnyNonOverlappingSlotPolicy,
    ContainingSlotPolicy,
    Slot,
    Table,
)
from tests.helpers import at


def test_slot_rejects_empty_or_reversed_interval():
    with pytest.raises(ValueError):
        Slot(at(18), at(18))
    with pytest.raises(ValueError):
        Slot(at(20), at(18))


def test_overlap_is_symmetric():
    slots = [
        Slot(at(17), at(19)), Slot(at(18), at(20)), Slot(at(20), at(21)),
        Slot(at(18, 30), at(19)), Slot(at(12), at(13)),
    ]
    for a, b in itertools.product(slots, repeat=2):
        assert a.overlaps(b) == b.overlaps(a)


def test_adjacent_slots_do_not_overlap():
    assert not Slot(at(18), at(20)).overlaps(Slot(at(20), at(22)))
    assert not Slot(at(20), at(22)).overlaps(Slot(at(18), at(20)))


def test_partial_and_nested_slots_overlap():
    assert Slot(at(18), at(20)).overlaps(Slot(at(19), at(21)))
    assert Slot(at(18), at(20)).overlaps(Slot(at(18, 30), at(19)))


def test_slot_contains():
    outer = Slot(at(18), at(22))
    assert outer.contains(Slot(at(18), at(20)))
    assert outer.contains(outer)
    assert not outer.contains(Slot(at(21), at(23)))


def test_slots_are_values():
    assert Slot(at(18), at(20)) == Slot(at(18), at(20))
    assert len({Slot(at(18), at(20)), Slot(at(18), at(20))}) == 1


def test_table_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        Table("1", "W", 0, "Main")
    with pytest.raises(ValueError):
        Table("1", "W", -2, "Main")


def test_add_free_slot_rejects_overlap():
    table = Table("1", "W", 4, "Main")
    table.add_free_slot(Slot(at(18), at(20)))
    table.add_free_slot(Slot(at(20), at(22)))
    with pytest.raises(ValueError):
        table.add_free_slot(Slot(at(19), at(21)))
    assert len(table.get_free_slots()) == 2


def test_default_policy_is_any_non_overlapping():
    assert isinstance(Table("1", "W", 4, "Main").get_availability_policy(),
                      AnyNonOverlappingSlotPolicy)


def test_any_non_overlapping_policy_reports_unrelated_free_slot():
    table = Table("1", "W", 4, "Main")
    table.add_free_slot(Slot(at(12), at(14)))
    # The requested window was never offered, yet the table reports available
    assert table.is_available(Slot(at(18), at(20)))


def test_any_non_overlapping_policy_single_matching_slot_is_unavailable():
    table = Table("1", "W", 4, "Main")
    table.add_free_slot(Slot(at(18), at(20)))
    assert not table.is_available(Slot(at(18), at(20)))


def test_containing_policy_requires_fitting_free_slot():
    table = Table("1", "W", 4, "Main", ContainingSlotPolicy())
    table.add_free_slot(Slot(at(12), at(14)))
    table.add_free_slot(Slot(at(18), at(22)))
    assert table.is_available(Slot(at(18), at(20)))
    assert not table.is_available(Slot(at(15), at(16)))
    assert not table.is_available(Slot(at(21), at(23)))


def test_mark_reserved_removes_overlapping_slots():
    table = Table("1", "W", 4, "Main")
    table.add_free_slot(Slot(at(12), at(14)))
    table.add_free_slot(Slot(at(18), at(20)))
    table.add_free_slot(Slot(at(20), at(22)))

    assert table.mark_reserved(Slot(at(19), at(21))) is True
    assert table.get_free_slots() == [Slot(at(12), at(14))]


def test_mark_reserved_without_overlap_is_noop():
    table = Table("1", "W", 4, "Main")
    table.add_free_slot(Slot(at(12), at(14)))
    before = table.get_free_slots()

    assert table.mark_reserved(Slot(at(18), at(20))) is True
    assert table.get_free_slots() == before


def test_release_slot_refuses_collision():
    table = Table("1", "W", 4, "Main")
    table.add_free_slot(Slot(at(18), at(20)))
    assert not table.release_slot(Slot(at(19), at(21)))
    assert table.release_slot(Slot(at(20), at(22)))
    assert len(table.get_free_slots()) == 2
