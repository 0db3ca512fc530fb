"""Local key-value persistence: two JSON blobs in a directory."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from re_portfolio.exceptions import ProviderError
from re_portfolio.history import upsert_point
from re_portfolio.models import EquityHistoryPoint, PropertyRecord
from re_portfolio.providers.base import PersistenceProvider
from re_portfolio.providers.serialization import (
    parse_history,
    parse_properties,
    point_to_dict,
    record_to_dict,
)

logger = logging.getLogger(__name__)


class LocalStoragePersistence(PersistenceProvider):
    """Scope-less store keeping each sequence as one JSON document.

    The whole store belongs to whoever runs the process, so ``scope`` is
    ignored. Each blob is a plain serialization of the in-memory sequence,
    without schema versioning. The history is clamped to the most recent
    ``max_history_points`` points.
    """

    def __init__(
        self,
        data_dir: str | Path,
        properties_key: str = "re_portfolio_v1",
        history_key: str = "re_portfolio_history_v1",
        max_history_points: int | None = 3650,
    ) -> None:
        """Initialize local storage.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding the blobs. Created on first write.
        properties_key : str
            Blob name for property records.
        history_key : str
            Blob name for the equity history.
        max_history_points : int | None
            History bound (None for unbounded).
        """
        self.data_dir = Path(data_dir)
        self.properties_key = properties_key
        self.history_key = history_key
        self.max_history_points = max_history_points

    def list_properties(self, scope: str) -> list[PropertyRecord]:
        return parse_properties(self._read(self.properties_key))

    def insert_properties(self, scope: str, records: list[PropertyRecord]) -> list[PropertyRecord]:
        existing = self.list_properties(scope)
        known = {r.id for r in existing}
        combined = existing + [r for r in records if r.id not in known]
        self._write(self.properties_key, [record_to_dict(r) for r in combined])
        return combined

    def upsert_properties(self, scope: str, records: list[PropertyRecord]) -> None:
        by_id = {r.id: r for r in records}
        merged = [by_id.pop(r.id, r) for r in self.list_properties(scope)]
        merged.extend(by_id.values())
        self._write(self.properties_key, [record_to_dict(r) for r in merged])

    def list_history(self, scope: str) -> list[EquityHistoryPoint]:
        return parse_history(self._read(self.history_key))

    def upsert_history_point(self, scope: str, day: date, equity: int) -> None:
        series = upsert_point(
            self.list_history(scope),
            EquityHistoryPoint(date=day, equity=equity),
            max_points=self.max_history_points,
        )
        self._write(self.history_key, [point_to_dict(p) for p in series])

    def clear_scope(self, scope: str) -> None:
        for key in (self.properties_key, self.history_key):
            try:
                self._path(key).unlink(missing_ok=True)
            except OSError as e:
                raise ProviderError(f"Could not remove {self._path(key)}: {e}") from e

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _read(self, key: str) -> Any:
        path = self._path(key)
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except ValueError:
            # Not JSON, or not UTF-8 text
            logger.warning("Stored blob %s is not valid JSON, using defaults", path)
            return None
        except OSError as e:
            raise ProviderError(f"Could not read {path}: {e}") from e

    def _write(self, key: str, data: list[dict]) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as e:
            raise ProviderError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %d entries to %s", len(data), path)
