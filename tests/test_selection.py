import pytest

from denom_picker.core.errors import SelectionLimitReached, UnknownDenomination
from denom_picker.services.catalog import DenominationCatalog
from denom_picker.services.selection import SelectionManager


@pytest.fixture
def selection() -> SelectionManager:
    return SelectionManager(DenominationCatalog.generate(), max_selections=4)


def test_empty_selection(selection):
    assert selection.count == 0
    assert selection.total() == 0
    assert selection.sorted_values() == ()
    assert selection.export_text() is None


def test_toggle_is_its_own_inverse(selection):
    selection.toggle(2**12)
    before = selection.sorted_values()
    assert selection.toggle(2**15) is True
    assert selection.toggle(2**15) is False
    assert selection.sorted_values() == before


def test_sorted_values_ascending_regardless_of_insertion(selection):
    selection.toggle(2**15)
    selection.toggle(2**10)
    assert selection.sorted_values() == (1024, 32768)
    assert selection.export_text() == "1024,32768"


def test_total_is_exact_sum(selection):
    for p in (10, 11, 20):
        selection.toggle(2**p)
    assert selection.total() == 2**10 + 2**11 + 2**20


def test_fifth_add_rejected_and_state_unchanged(selection):
    for p in (10, 11, 12, 13):
        selection.toggle(2**p)
    before_values = selection.sorted_values()
    before_total = selection.total()
    with pytest.raises(SelectionLimitReached) as exc:
        selection.toggle(2**14)
    assert exc.value.limit == 4
    assert "up to 4 denominations" in str(exc.value)
    assert selection.count == 4
    assert selection.sorted_values() == before_values
    assert selection.total() == before_total


def test_remove_allowed_when_full(selection):
    for p in (10, 11, 12, 13):
        selection.toggle(2**p)
    assert selection.is_full
    assert selection.toggle(2**10) is False
    assert selection.toggle(2**14) is True
    assert selection.count == 4


def test_unknown_value_rejected(selection):
    with pytest.raises(UnknownDenomination):
        selection.toggle(1000)
    with pytest.raises(ValueError):
        selection.add(3)
    assert selection.count == 0


def test_add_is_idempotent_and_remove_discards(selection):
    selection.add(1024)
    selection.add(1024)
    assert selection.count == 1
    selection.remove(1024)
    selection.remove(1024)
    assert selection.count == 0


def test_custom_limit():
    s = SelectionManager(DenominationCatalog.generate(), max_selections=1)
    s.toggle(1024)
    with pytest.raises(SelectionLimitReached):
        s.toggle(2048)


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        SelectionManager(DenominationCatalog.generate(), max_selections=0)
