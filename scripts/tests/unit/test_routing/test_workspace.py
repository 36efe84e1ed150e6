"""Tests for town root discovery."""

import pytest

from routing import Route, TownNotFoundError, find_town_root, find_town_root_or_none, write_routes


def _make_town_marker(root):
    (root / "mayor").mkdir(parents=True, exist_ok=True)
    (root / "mayor" / "town.json").write_text("{}", encoding="utf-8")


class TestFindTownRoot:
    def test_marker_at_start(self, tmp_path):
        _make_town_marker(tmp_path)
        assert find_town_root(tmp_path) == tmp_path.resolve()

    def test_marker_above_rig(self, tmp_path):
        _make_town_marker(tmp_path)
        rig = tmp_path / "testrig" / "mayor" / "rig"
        rig.mkdir(parents=True)
        # testrig/mayor exists but has no town.json
        assert find_town_root(rig) == tmp_path.resolve()

    def test_routes_file_fallback(self, tmp_path):
        write_routes(tmp_path / ".beads", [Route(prefix="hq-", path=".")])
        rig = tmp_path / "testrig" / "mayor" / "rig"
        rig.mkdir(parents=True)
        assert find_town_root(rig) == tmp_path.resolve()

    def test_marker_preferred_over_nearer_routes_file(self, tmp_path):
        _make_town_marker(tmp_path)
        inner = tmp_path / "nested"
        write_routes(inner / ".beads", [Route(prefix="n-", path=".")])
        assert find_town_root(inner) == tmp_path.resolve()

    def test_not_found(self, tmp_path):
        start = tmp_path / "nowhere"
        start.mkdir()
        assert find_town_root_or_none(start) is None
        with pytest.raises(TownNotFoundError):
            find_town_root(start)
