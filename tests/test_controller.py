from __future__ import annotations

from arenatrack.api.store import PROFILES_TABLE
from arenatrack.models import COMPLETED_FIELD, ConnectionState
from arenatrack.sync import SyncController


def test_load_seeds_default_profiles_when_empty(controller) -> None:
    assert [p.name for p in controller.profiles] == ["Me", "My Friend"]
    assert all(p.completed == [] for p in controller.profiles)
    assert controller.selected_id == controller.profiles[0].id
    assert controller.state is ConnectionState.READY


def test_load_does_not_seed_existing_profiles(flaky_store, local_store) -> None:
    local_store.insert(PROFILES_TABLE, {"name": "B", COMPLETED_FIELD: [], "created_at": "2024-02-01T00:00:00+00:00"})
    local_store.insert(PROFILES_TABLE, {"name": "A", COMPLETED_FIELD: [], "created_at": "2024-01-01T00:00:00+00:00"})

    controller = SyncController(flaky_store)
    profiles = controller.load()

    assert [p.name for p in profiles] == ["A", "B"]
    assert "insert" not in flaky_store.calls
    assert controller.selected.name == "A"


def test_load_with_custom_default_names(flaky_store) -> None:
    controller = SyncController(flaky_store, default_names=("Solo",))
    assert [p.name for p in controller.load()] == ["Solo"]


def test_connection_failure_is_terminal(flaky_store) -> None:
    flaky_store.connected = False
    controller = SyncController(flaky_store)

    assert controller.load() == []
    assert controller.state is ConnectionState.FAILED

    flaky_store.connected = True
    assert controller.load() == []
    assert flaky_store.calls == ["test_connection"]


def test_fetch_error_during_load_fails_softly(flaky_store) -> None:
    flaky_store.fail_on.add("select")
    controller = SyncController(flaky_store)

    assert controller.load() == []
    assert controller.state is ConnectionState.FAILED


def test_seeding_skips_profiles_that_fail(flaky_store) -> None:
    flaky_store.fail_on.add("insert")
    controller = SyncController(flaky_store)

    assert controller.load() == []
    assert controller.selected is None
    assert controller.state is ConnectionState.READY


def test_create_blank_name_is_rejected(controller, flaky_store) -> None:
    before = list(controller.profiles)
    flaky_store.calls.clear()

    assert controller.create("") is None
    assert controller.create("   ") is None

    assert controller.profiles == before
    assert flaky_store.calls == []


def test_create_trims_and_selects_new_profile(controller) -> None:
    profile = controller.create("  Duo Partner ")

    assert profile.name == "Duo Partner"
    assert profile.completed == []
    assert controller.selected_id == profile.id
    assert [p.name for p in controller.profiles] == ["Me", "My Friend", "Duo Partner"]


def test_create_failure_leaves_state_unchanged(controller, flaky_store) -> None:
    before = list(controller.profiles)
    selected = controller.selected_id
    flaky_store.fail_on.add("insert")

    assert controller.create("Nope") is None
    assert controller.profiles == before
    assert controller.selected_id == selected


def test_rename_keeps_completed_set(controller) -> None:
    me = controller.profiles[0]
    controller.toggle_completion(me.id, "Ahri")

    renamed = controller.rename(me.id, " Captain ")

    assert renamed.name == "Captain"
    assert renamed.completed == ["Ahri"]
    assert renamed.id == me.id
    assert controller.get(me.id).name == "Captain"
    assert renamed.updated_at is not None


def test_rename_rejects_blank_and_unknown(controller, flaky_store) -> None:
    flaky_store.calls.clear()
    assert controller.rename(controller.profiles[0].id, " ") is None
    assert controller.rename("missing", "Name") is None
    assert flaky_store.calls == []


def test_toggle_twice_restores_completed_set(controller) -> None:
    me = controller.profiles[0]
    controller.toggle_completion(me.id, "Zed")
    original = set(controller.get(me.id).completed)

    controller.toggle_completion(me.id, "Lux")
    assert set(controller.get(me.id).completed) == original | {"Lux"}

    controller.toggle_completion(me.id, "Lux")
    assert set(controller.get(me.id).completed) == original


def test_toggle_is_persisted(controller, local_store) -> None:
    me = controller.profiles[0]
    controller.toggle_completion(me.id, "Zed")

    row = next(r for r in local_store.select(PROFILES_TABLE) if r["id"] == me.id)
    assert row[COMPLETED_FIELD] == ["Zed"]


def test_toggle_failure_leaves_state_unchanged(controller, flaky_store) -> None:
    me = controller.profiles[0]
    flaky_store.fail_on.add("update")

    assert controller.toggle_completion(me.id, "Zed") is None
    assert controller.get(me.id).completed == []


def test_toggle_replaces_the_whole_set_last_write_wins(flaky_store) -> None:
    first = SyncController(flaky_store)
    first.load()
    second = SyncController(flaky_store)
    second.load()
    profile_id = first.profiles[0].id

    first.toggle_completion(profile_id, "Ahri")
    second.toggle_completion(profile_id, "Zed")

    assert second.fetch_profiles()[0].completed == ["Zed"]


def test_delete_last_profile_is_noop(flaky_store) -> None:
    controller = SyncController(flaky_store, default_names=("Only",))
    controller.load()
    before = (list(controller.profiles), controller.selected_id)
    flaky_store.calls.clear()

    assert controller.delete(controller.profiles[0].id) is False
    assert (controller.profiles, controller.selected_id) == before
    assert flaky_store.calls == []


def test_delete_selected_profile_selects_next(controller) -> None:
    first, second = controller.profiles
    controller.select(first.id)

    assert controller.delete(first.id) is True

    assert [p.id for p in controller.profiles] == [second.id]
    assert controller.selected_id == second.id


def test_delete_other_profile_keeps_selection(controller) -> None:
    first, second = controller.profiles
    controller.select(first.id)

    controller.delete(second.id)

    assert controller.selected_id == first.id


def test_delete_failure_keeps_profile(controller, flaky_store) -> None:
    flaky_store.fail_on.add("delete")
    target = controller.profiles[1]

    assert controller.delete(target.id) is False
    assert controller.get(target.id) is not None


def test_apply_snapshot_reconciles_selection(controller) -> None:
    first, second = controller.profiles
    controller.select(first.id)

    controller.apply_snapshot([second])

    assert controller.profiles == [second]
    assert controller.selected_id == second.id

    controller.apply_snapshot([])
    assert controller.selected_id is None


def test_find_matches_name_case_insensitively(controller) -> None:
    assert controller.find("my friend").name == "My Friend"
    assert controller.find(controller.profiles[0].id).name == "Me"
    assert controller.find("nobody") is None


def test_select_unknown_profile_is_refused(controller) -> None:
    selected = controller.selected_id
    assert controller.select("missing") is False
    assert controller.selected_id == selected


def test_duplicate_completed_keys_are_dropped_on_load(flaky_store, local_store) -> None:
    local_store.insert(PROFILES_TABLE, {"name": "Dup", COMPLETED_FIELD: ["Zed", "Lux", "Zed"]})
    controller = SyncController(flaky_store)
    controller.load()

    assert controller.profiles[0].completed == ["Zed", "Lux"]
