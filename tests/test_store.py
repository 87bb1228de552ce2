"""Tests for chat_commands.store: ConfigStore and StatStore."""

import json

from chat_commands.store import KILLCOUNT, PERSONALBEST, ConfigStore, StatStore


class TestConfigStore:
    def test_missing_key_is_none(self, tmp_path) -> None:
        cs = ConfigStore(tmp_path)
        assert cs.get_configuration("killcount.zezima", "zulrah") is None

    def test_set_then_get(self, tmp_path) -> None:
        cs = ConfigStore(tmp_path)
        cs.set_configuration("killcount.zezima", "zulrah", 42)
        assert cs.get_configuration("killcount.zezima", "zulrah") == 42

    def test_one_file_per_group(self, tmp_path) -> None:
        cs = ConfigStore(tmp_path)
        cs.set_configuration("killcount.zezima", "zulrah", 42)
        cs.set_configuration("personalbest.zezima", "zulrah", 150)
        path = tmp_path / "stats" / "killcount.zezima.json"
        assert json.loads(path.read_text()) == {"zulrah": 42}
        assert (tmp_path / "stats" / "personalbest.zezima.json").exists()

    def test_overwrite_keeps_other_keys(self, tmp_path) -> None:
        cs = ConfigStore(tmp_path)
        cs.set_configuration("g", "a", 1)
        cs.set_configuration("g", "b", 2)
        cs.set_configuration("g", "a", 3)
        assert cs.get_group("g") == {"a": 3, "b": 2}

    def test_values_survive_a_new_instance(self, tmp_path) -> None:
        ConfigStore(tmp_path).set_configuration("g", "k", 7)
        assert ConfigStore(tmp_path).get_configuration("g", "k") == 7


class TestStatStore:
    def test_round_trip_any_casing(self, store: StatStore) -> None:
        store.set("ZeZiMa", "ZULRAH", 42)
        assert store.get("zezima", "zulrah") == 42
        assert store.get("ZEZIMA", "Zulrah") == 42

    def test_unseen_is_none_and_helpers_read_zero(self, store: StatStore) -> None:
        assert store.get("zezima", "Vorkath") is None
        assert store.get_kc("zezima", "Vorkath") == 0
        assert store.get_pb("zezima", "Vorkath") == 0

    def test_namespaces_are_separate(self, store: StatStore) -> None:
        store.set_kc("Zezima", "Zulrah", 42)
        store.set_pb("Zezima", "Zulrah", 150)
        assert store.get("zezima", "zulrah", KILLCOUNT) == 42
        assert store.get("zezima", "zulrah", PERSONALBEST) == 150

    def test_players_are_separate(self, store: StatStore) -> None:
        store.set_kc("Zezima", "Zulrah", 42)
        assert store.get_kc("Lynx Titan", "Zulrah") == 0

    def test_all_lists_a_namespace(self, store: StatStore) -> None:
        store.set_kc("Zezima", "Zulrah", 42)
        store.set_kc("Zezima", "Vorkath", 10)
        assert store.all("zezima") == {"vorkath": 10, "zulrah": 42}
