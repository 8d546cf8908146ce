from __future__ import annotations

import pytest

from delve_calculator.profile import Profile


def test_add_kills_accumulates_per_floor():
    profile = Profile("All")
    profile.add_kills(3, 1)
    profile.add_kills(3, 4)
    profile.add_kills(5, 2)
    assert profile.level_kills == {3: 5, 5: 2}
    assert profile.total_kills() == 7


def test_add_kills_does_not_validate_floor():
    profile = Profile("All")
    profile.add_kills(12, 1)
    assert profile.level_kills == {12: 1}


def test_waves_and_drops():
    profile = Profile("All")
    profile.add_wave_8()
    profile.add_wave_8()
    profile.add_drop(31130)
    profile.add_drop(99999)
    profile.add_drop(31130)
    assert profile.waves_past_8 == 2
    assert profile.kills_for_floor(9) == 2
    assert profile.obtained(31130) == 2
    assert profile.obtained(99999) == 1
    assert profile.obtained(1) == 0


def test_reset_zeroes_everything_but_keeps_name():
    profile = Profile("Manual", level_kills={2: 10}, waves_past_8=3, obtained_uniques={31109: 1})
    profile.reset()
    assert profile.name == "Manual"
    assert profile.level_kills == {}
    assert profile.waves_past_8 == 0
    assert profile.obtained_uniques == {}
    assert profile.is_empty()


def test_copy_is_independent():
    profile = Profile("All", level_kills={2: 1})
    clone = profile.copy()
    clone.add_kills(2, 1)
    assert profile.level_kills == {2: 1}
    assert clone == Profile("All", level_kills={2: 2})


def test_document_uses_saved_data_keys():
    profile = Profile("All", level_kills={3: 2}, waves_past_8=1, obtained_uniques={31109: 1})
    assert profile.to_dict() == {
        "name": "All",
        "levelKills": {"3": 2},
        "wavesPast8": 1,
        "obtainedUniques": {"31109": 1},
    }


def test_from_dict_restores_int_keys_and_keeps_opaque_items():
    profile = Profile.from_dict({
        "name": "All",
        "levelKills": {"1": 4, "8": 2},
        "wavesPast8": 5,
        "obtainedUniques": {"31130": 1, "future-item": 3},
    })
    assert profile.level_kills == {1: 4, 8: 2}
    assert profile.waves_past_8 == 5
    assert profile.obtained_uniques == {31130: 1, "future-item": 3}


def test_from_dict_tolerates_missing_fields():
    assert Profile.from_dict({"name": "Session"}) == Profile("Session")


@pytest.mark.parametrize(
    "data",
    [
        {"levelKills": {"3": -1}},
        {"levelKills": {"three": 1}},
        {"wavesPast8": "lots"},
        {"obtainedUniques": [1, 2]},
        "not a profile",
    ],
)
def test_from_dict_rejects_malformed_entries(data):
    with pytest.raises((TypeError, ValueError)):
        Profile.from_dict(data)


def test_digit_string_drops_share_the_int_key():
    profile = Profile("All")
    profile.add_drop("31109")
    profile.add_drop(31109)
    assert profile.obtained_uniques == {31109: 2}
    assert profile.obtained("31109") == 2


@pytest.mark.parametrize("count", [float("inf"), float("nan"), 1e400])
def test_from_dict_rejects_non_finite_counts(count):
    with pytest.raises(ValueError):
        Profile.from_dict({"wavesPast8": count})
    with pytest.raises(ValueError):
        Profile.from_dict({"obtainedUniques": {"31109": count}})
