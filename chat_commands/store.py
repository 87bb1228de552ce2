"""JSON file stat storage.

Stats are stored in flat JSON files under a configurable base directory, one
file per configuration group. There is no database; every write loads the
group file, updates one key and dumps it back, so each set is an independent
durable write.

Directory layout:

    {base}/
      stats/
        killcount.{player}.json     ← {category: count}
        personalbest.{player}.json  ← {category: seconds}

Group names and keys are lower-cased before they touch disk, which makes
player identity and category case-insensitive.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

KILLCOUNT = "killcount"
PERSONALBEST = "personalbest"


class ConfigStore:
    """Durable (group, key) → int store."""

    def __init__(self, base_path: Path) -> None:
        self._stats_root = base_path / "stats"
        self._stats_root.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Internal path helpers
    # ------------------------------------------------------------------

    def _group_file(self, group: str) -> Path:
        return self._stats_root / f"{group.lower()}.json"

    def _read_group(self, group: str) -> dict[str, int]:
        path = self._group_file(group)
        if not path.exists():
            return {}
        return json.loads(path.read_text())

    def _write_group(self, group: str, data: dict[str, int]) -> None:
        self._group_file(group).write_text(json.dumps(data, indent=2, sort_keys=True))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_configuration(self, group: str, key: str) -> int | None:
        value = self._read_group(group).get(key.lower())
        return int(value) if value is not None else None

    def set_configuration(self, group: str, key: str, value: int) -> None:
        data = self._read_group(group)
        data[key.lower()] = int(value)
        self._write_group(group, data)

    def get_group(self, group: str) -> dict[str, int]:
        """All keys stored under one group."""
        return self._read_group(group)


class StatStore:
    """Per-player statistics view over a ConfigStore.

    Keys are (player, category) inside a namespace; the group on disk is
    "<namespace>.<player>".
    """

    def __init__(self, config_store: ConfigStore) -> None:
        self._config = config_store

    @staticmethod
    def _group(namespace: str, player: str) -> str:
        return f"{namespace}.{player.lower()}"

    def get(self, player: str, category: str, namespace: str = KILLCOUNT) -> int | None:
        return self._config.get_configuration(self._group(namespace, player), category)

    def set(self, player: str, category: str, value: int, namespace: str = KILLCOUNT) -> None:
        logger.debug("store %s.%s %s=%d", namespace, player.lower(), category.lower(), value)
        self._config.set_configuration(self._group(namespace, player), category, value)

    def all(self, player: str, namespace: str = KILLCOUNT) -> dict[str, int]:
        return self._config.get_group(self._group(namespace, player))

    # Absent values read as 0 for callers that only care about counts.

    def get_kc(self, player: str, boss: str) -> int:
        return self.get(player, boss) or 0

    def set_kc(self, player: str, boss: str, kc: int) -> None:
        self.set(player, boss, kc)

    def get_pb(self, player: str, boss: str) -> int:
        return self.get(player, boss, PERSONALBEST) or 0

    def set_pb(self, player: str, boss: str, seconds: int) -> None:
        self.set(player, boss, seconds, PERSONALBEST)
