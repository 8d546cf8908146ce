from __future__ import annotations

from delve_calculator.persistence import ProfileFile, load_legacy_properties, parse_legacy_properties


def test_missing_file_loads_as_none(tmp_path):
    assert ProfileFile(tmp_path / "profiles.json").load() is None


def test_save_creates_folder_and_replaces_atomically(tmp_path):
    path = tmp_path / "nested" / "profiles.json"
    profile_file = ProfileFile(path)
    assert profile_file.save('{"profiles": {}}')
    assert profile_file.save('{"profiles": {"STANDARD": {}}}')
    assert profile_file.load() == '{"profiles": {"STANDARD": {}}}'
    assert not (tmp_path / "nested" / "profiles.json.tmp").exists()


def test_failed_save_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a folder", encoding="utf-8")
    assert ProfileFile(blocker / "profiles.json").save("{}") is False
    assert "Failed to save profile data" in caplog.text


def test_unreadable_file_loads_as_none(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    assert ProfileFile(path).load() is None


def test_legacy_properties():
    text = "#Sat Jan 01 12:00:00 GMT 2025\nlevel1=5\nlevel2 = 7\nlevel4:2\nlevel6=oops\nlevel8+=11\n"
    level_kills, waves = parse_legacy_properties(text)
    assert level_kills == {1: 5, 2: 7, 3: 0, 4: 2, 5: 0, 6: 0, 7: 0, 8: 0}
    assert waves == 11


def test_empty_legacy_properties():
    level_kills, waves = parse_legacy_properties("")
    assert set(level_kills) == set(range(1, 9))
    assert not any(level_kills.values())
    assert waves == 0


def test_load_legacy_properties(tmp_path):
    assert load_legacy_properties(tmp_path / "missing.properties") is None
    path = tmp_path / "delve-calculator.properties"
    path.write_text("level3=2\n", encoding="latin-1")
    level_kills, waves = load_legacy_properties(path)
    assert level_kills[3] == 2
    assert waves == 0
