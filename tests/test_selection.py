import pytest

from selection import SelectionStore, UnknownFacility


def test_defaults_to_first_record(shipped_catalog):
    store = SelectionStore(shipped_catalog)
    assert store.current().id == "h1"


def test_select_then_current_round_trip(shipped_catalog):
    store = SelectionStore(shipped_catalog)
    for fid in shipped_catalog.ids():
        store.select(fid)
        assert store.current().id == fid
        assert store.current_id == fid


def test_unknown_select_changes_nothing(shipped_catalog):
    store = SelectionStore(shipped_catalog)
    store.select("h2")
    seen = []
    store.subscribe(seen.append)

    with pytest.raises(UnknownFacility) as info:
        store.select("h99")

    assert info.value.facility_id == "h99"
    assert store.current().id == "h2"
    assert seen == []


def test_unknown_initial_id_rejected(shipped_catalog):
    with pytest.raises(UnknownFacility):
        SelectionStore(shipped_catalog, initial_id="nope")


def test_listeners_see_committed_selection(shipped_catalog):
    """Listeners run before select() returns and already see the new id."""
    store = SelectionStore(shipped_catalog)
    observed = []
    store.subscribe(lambda rec: observed.append((rec.id, store.current().id)))

    store.select("h3")

    assert observed == [("h3", "h3")]


def test_repeat_select_notifies_each_time(shipped_catalog):
    store = SelectionStore(shipped_catalog)
    seen = []
    store.subscribe(lambda rec: seen.append(rec.id))

    store.select("h4")
    store.select("h4")

    assert seen == ["h4", "h4"]
    assert store.current().id == "h4"


def test_unsubscribe(shipped_catalog):
    store = SelectionStore(shipped_catalog)
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    unsubscribe()  # second call is harmless

    store.select("h2")
    assert seen == []
