from __future__ import annotations

import json

import pytest

from delve_calculator.config import AVERNIC_TREADS, DOM, MOKHAIOTL_CLOTH
from delve_calculator.events import CollectionLogEntry
from delve_calculator.models import RewardDisplayMode, View
from delve_calculator.settings import TrackerSettings
from delve_calculator.tracker import DelveTracker


@pytest.fixture
def tracker(settings):
    return DelveTracker.open(settings)


def test_mixed_events_across_views(tracker):
    tracker.on_floor_completed("STANDARD", 2)
    tracker.on_floor_completed("STANDARD", "8+")
    tracker.on_drop_obtained("STANDARD", MOKHAIOTL_CLOTH)

    for view in View:
        profile = tracker.get_profile("STANDARD", view)
        assert profile.level_kills == {2: 1}
        assert profile.waves_past_8 == 1
        assert profile.obtained(MOKHAIOTL_CLOTH) == 1


def test_invalid_floor_is_logged_and_dropped(tracker, caplog):
    assert tracker.on_floor_completed("STANDARD", 0) is False
    assert tracker.on_floor_completed("STANDARD", "nine") is False
    assert tracker.store.profiles == {}
    assert "Ignoring completion for STANDARD" in caplog.text


def test_chat_completion_and_pet(tracker):
    assert tracker.handle_chat_message("STANDARD", "Delve level: 6 duration: 3:01")
    assert tracker.handle_chat_message("STANDARD", "You have a funny feeling like you're being followed.")
    assert not tracker.handle_chat_message("STANDARD", "Welcome to Old School RuneScape.")

    profile = tracker.get_profile("STANDARD", View.ALL)
    assert profile.level_kills == {6: 1}
    assert profile.obtained(DOM) == 1


def test_pet_message_outside_the_delve_is_ignored(tracker):
    message = "You feel something weird sneaking into your backpack."
    assert not tracker.handle_chat_message("STANDARD", message, in_region=False)
    assert tracker.get_profile("STANDARD", View.ALL).obtained(DOM) == 0


def test_loot_records_each_unique(tracker):
    assert tracker.handle_loot("STANDARD", ["Avernic treads", "Dom", "Coins"]) == [AVERNIC_TREADS]
    assert tracker.get_profile("STANDARD", View.SESSION).obtained(AVERNIC_TREADS) == 1
    assert tracker.get_profile("STANDARD", View.SESSION).obtained(DOM) == 0


def test_scoreboard_and_collection_log_sync_the_all_view(tracker):
    tracker.on_floor_completed("STANDARD", 3)
    tracker.handle_scoreboard("STANDARD", ["0", "4", "7", "", "", "", "", "2", "5"])
    assert tracker.handle_collection_log("STANDARD", [CollectionLogEntry("Dom", 1)])
    assert not tracker.handle_collection_log("STANDARD", [CollectionLogEntry("Abyssal whip", 1)])

    everything = tracker.get_profile("STANDARD", View.ALL)
    assert everything.level_kills == {1: 0, 2: 4, 3: 7, 8: 2}
    assert everything.waves_past_8 == 5
    assert everything.obtained_uniques == {DOM: 1}
    assert tracker.get_profile("STANDARD", View.MANUAL).level_kills == {3: 1}


def test_greyed_item_leaves_the_any_aggregate(tracker):
    tracker.on_authoritative_kill_sync("STANDARD", {8: 630}, 0)
    profile = tracker.get_profile("STANDARD", View.ALL)
    assert tracker.get_any_expected(profile) == pytest.approx(3 + 630 / 500)

    tracker.settings.display_modes[DOM] = RewardDisplayMode.GREY
    assert tracker.get_any_expected(profile) == pytest.approx(3.0)
    assert tracker.get_expected_drops(profile)[DOM] == pytest.approx(630 / 500)

    tracker.settings.display_modes[MOKHAIOTL_CLOTH] = RewardDisplayMode.HIDE
    assert tracker.get_any_expected(profile) == pytest.approx(2.0)


def test_progress_ends_with_any_row(tracker):
    tracker.on_authoritative_kill_sync("STANDARD", {2: 5000}, 0)
    rows = tracker.get_progress(tracker.get_profile("STANDARD", View.ALL))
    assert len(rows) == 5
    assert rows[0].item_id == MOKHAIOTL_CLOTH
    assert rows[0].expected == pytest.approx(2.0)
    assert rows[-1].item_id is None
    assert rows[-1].expected == pytest.approx(2.0)


def test_luck_report(tracker):
    tracker.on_authoritative_kill_sync("STANDARD", {2: 2500}, 0)
    tracker.on_authoritative_drop_sync("STANDARD", {MOKHAIOTL_CLOTH: 3})
    report = tracker.get_luck(tracker.get_profile("STANDARD", View.ALL))
    assert report.for_item(MOKHAIOTL_CLOTH).luck == pytest.approx(2.0)
    assert report.scale == pytest.approx(2.0)


def test_profiles_survive_a_restart_but_session_does_not(settings):
    tracker = DelveTracker.open(settings)
    tracker.on_floor_completed("STANDARD", 4)
    tracker.on_drop_obtained("SEASONAL", DOM)

    document = json.loads(settings.profiles_path.read_text(encoding="utf-8"))
    assert set(document["profiles"]) == {"STANDARD", "STANDARD:MANUAL", "SEASONAL", "SEASONAL:MANUAL"}

    reopened = DelveTracker.open(settings)
    assert reopened.store == tracker.store
    assert reopened.get_profile("STANDARD", View.MANUAL).level_kills == {4: 1}
    assert reopened.get_profile("STANDARD", View.SESSION).is_empty()
    assert not reopened.store.has_profile("STANDARD", View.SESSION)


def test_reset_manual_is_persisted(settings):
    tracker = DelveTracker.open(settings)
    tracker.on_floor_completed("STANDARD", 4)
    tracker.reset_manual("STANDARD")

    reopened = DelveTracker.open(settings)
    assert reopened.get_profile("STANDARD", View.MANUAL).is_empty()
    assert reopened.get_profile("STANDARD", View.ALL).level_kills == {4: 1}


def test_corrupt_profile_document_starts_empty(settings, caplog):
    settings.data_dir.mkdir(parents=True)
    settings.profiles_path.write_text("{{{", encoding="utf-8")

    tracker = DelveTracker.open(settings)
    assert tracker.store.profiles == {}
    assert "Discarding unreadable profile data" in caplog.text

    tracker.on_floor_completed("STANDARD", 2)
    assert json.loads(settings.profiles_path.read_text(encoding="utf-8"))["profiles"]["STANDARD"]["levelKills"] == {"2": 1}


def test_legacy_properties_seed_the_standard_profile(settings):
    settings.data_dir.mkdir(parents=True)
    settings.legacy_path.write_text(
        "#Delve calculator\nlevel1=3\nlevel2=10\nlevel8=1\nlevel8+=4\n",
        encoding="latin-1",
    )
    tracker = DelveTracker.open(settings)
    profile = tracker.get_profile("STANDARD", View.ALL)
    assert profile.level_kills == {1: 3, 2: 10, 8: 1}
    assert profile.waves_past_8 == 4
    assert settings.profiles_path.exists()


def test_legacy_properties_ignored_once_profiles_exist(settings):
    settings.data_dir.mkdir(parents=True)
    settings.profiles_path.write_text('{"profiles": {}}', encoding="utf-8")
    settings.legacy_path.write_text("level2=10\n", encoding="latin-1")
    tracker = DelveTracker.open(settings)
    assert tracker.store.profiles == {}


def test_open_without_settings_uses_environment_home(isolated_home):
    tracker = DelveTracker.open()
    assert tracker.settings.data_dir == isolated_home
    tracker.on_floor_completed("STANDARD", 2)
    assert (isolated_home / "profiles.json").exists()


def test_tracker_without_persistence_keeps_everything_in_memory(tmp_path):
    tracker = DelveTracker(settings=TrackerSettings(data_dir=tmp_path / "unused"))
    tracker.on_floor_completed("STANDARD", 2)
    assert tracker.get_profile("STANDARD", View.ALL).level_kills == {2: 1}
    assert not (tmp_path / "unused").exists()
