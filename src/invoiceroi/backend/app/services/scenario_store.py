"""Repositories persisting named simulation scenarios."""

from __future__ import annotations

import os
import sqlite3
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, List, Protocol

from invoiceroi.backend.app.models import (
    RESULT_FIELDS,
    SCENARIO_INPUT_FIELDS,
    ScenarioInput,
    SimulationResult,
)


@dataclass(frozen=True)
class ScenarioRecord:
    """Stored scenario: sanitised inputs plus their computed result."""

    id: int
    name: str
    inputs: ScenarioInput
    result: SimulationResult
    created_at: datetime

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-serialisable representation exposed by the API."""

        payload: dict[str, Any] = {"id": self.id, "scenario_name": self.name}
        payload.update(self.inputs.model_dump())
        payload.update(self.result.to_payload())
        payload["created_at"] = self.created_at.isoformat()
        return payload


class ScenarioRepository(Protocol):
    """Storage interface shared by the in-memory and SQLite repositories."""

    def save(
        self, name: str, inputs: ScenarioInput, result: SimulationResult
    ) -> ScenarioRecord: ...

    def list(self) -> List[ScenarioRecord]: ...

    def get(self, scenario_id: int) -> ScenarioRecord: ...

    def delete(self, scenario_id: int) -> bool: ...


def _validate_capacity(max_items: int | None) -> None:
    if max_items is not None and max_items <= 0:
        raise ValueError("max_items must be positive when provided")


class InMemoryScenarioRepository:
    """Thread-safe in-memory scenario storage with auto-incrementing ids."""

    def __init__(
        self,
        *,
        max_items: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        _validate_capacity(max_items)
        self._max_items = max_items
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._records: "OrderedDict[int, ScenarioRecord]" = OrderedDict()
        self._next_id = 1
        self._lock = Lock()

    def _cleanup_locked(self) -> None:
        if self._max_items is not None:
            while len(self._records) > self._max_items:
                self._records.popitem(last=False)

    def save(
        self, name: str, inputs: ScenarioInput, result: SimulationResult
    ) -> ScenarioRecord:
        with self._lock:
            record = ScenarioRecord(
                id=self._next_id,
                name=name,
                inputs=inputs,
                result=result,
                created_at=self._clock(),
            )
            self._next_id += 1
            self._records[record.id] = record
            self._cleanup_locked()
        return record

    def list(self) -> List[ScenarioRecord]:
        with self._lock:
            return sorted(self._records.values(), key=lambda record: record.id, reverse=True)

    def get(self, scenario_id: int) -> ScenarioRecord:
        with self._lock:
            record = self._records.get(scenario_id)
        if record is None:
            raise KeyError(scenario_id)
        return record

    def delete(self, scenario_id: int) -> bool:
        with self._lock:
            return self._records.pop(scenario_id, None) is not None


_COLUMNS: tuple[str, ...] = (
    "scenario_name",
    *SCENARIO_INPUT_FIELDS,
    *RESULT_FIELDS,
    "created_at",
)


class SQLiteScenarioRepository:
    """SQLite-backed scenario repository."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        max_items: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        _validate_capacity(max_items)
        self._path = str(path)
        self._max_items = max_items
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = Lock()
        self._initialise()

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._path, check_same_thread=False)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        return connection

    def _initialise(self) -> None:
        with self._connect() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS scenario (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    scenario_name TEXT NOT NULL,
                    monthly_invoice_volume REAL NOT NULL,
                    num_ap_staff REAL NOT NULL,
                    avg_hours_per_invoice REAL NOT NULL,
                    hourly_wage REAL NOT NULL,
                    error_rate_manual REAL NOT NULL,
                    error_cost REAL NOT NULL,
                    time_horizon_months INTEGER NOT NULL,
                    one_time_implementation_cost REAL NOT NULL DEFAULT 0,
                    monthly_savings REAL,
                    cumulative_savings REAL,
                    net_savings REAL,
                    payback_months REAL,
                    roi_percentage REAL,
                    created_at TEXT NOT NULL
                )
                """
            )

    def _cleanup_locked(self, connection: sqlite3.Connection) -> None:
        if self._max_items is None:
            return
        excess = connection.execute(
            "SELECT COUNT(*) - ? FROM scenario",
            (self._max_items,),
        ).fetchone()[0]
        if excess is not None and excess > 0:
            connection.execute(
                "DELETE FROM scenario WHERE id IN ("
                "SELECT id FROM scenario ORDER BY id ASC LIMIT ?"
                ")",
                (excess,),
            )

    @staticmethod
    def _decode_record(row: sqlite3.Row) -> ScenarioRecord:
        inputs = ScenarioInput.model_validate(
            {field: row[field] for field in SCENARIO_INPUT_FIELDS}
        )
        # SQLite stores NaN as NULL; keep the dataclass numeric.
        result = SimulationResult(
            **{
                field: float("nan") if row[field] is None else float(row[field])
                for field in RESULT_FIELDS
            }
        )
        created_at = datetime.fromisoformat(row["created_at"])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return ScenarioRecord(
            id=int(row["id"]),
            name=row["scenario_name"],
            inputs=inputs,
            result=result,
            created_at=created_at,
        )

    def save(
        self, name: str, inputs: ScenarioInput, result: SimulationResult
    ) -> ScenarioRecord:
        created_at = self._clock()
        values = (
            name,
            *(getattr(inputs, field) for field in SCENARIO_INPUT_FIELDS),
            *(getattr(result, field) for field in RESULT_FIELDS),
            created_at.isoformat(),
        )
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._lock:
            with self._connect() as connection:
                cursor = connection.execute(
                    f"INSERT INTO scenario ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                    values,
                )
                scenario_id = int(cursor.lastrowid)
                self._cleanup_locked(connection)
        return ScenarioRecord(
            id=scenario_id,
            name=name,
            inputs=inputs,
            result=result,
            created_at=created_at,
        )

    def list(self) -> List[ScenarioRecord]:
        with self._lock:
            with self._connect() as connection:
                rows = connection.execute(
                    "SELECT * FROM scenario ORDER BY id DESC"
                ).fetchall()
        return [self._decode_record(row) for row in rows]

    def get(self, scenario_id: int) -> ScenarioRecord:
        with self._lock:
            with self._connect() as connection:
                row = connection.execute(
                    "SELECT * FROM scenario WHERE id = ?",
                    (scenario_id,),
                ).fetchone()
        if row is None:
            raise KeyError(scenario_id)
        return self._decode_record(row)

    def delete(self, scenario_id: int) -> bool:
        with self._lock:
            with self._connect() as connection:
                cursor = connection.execute(
                    "DELETE FROM scenario WHERE id = ?",
                    (scenario_id,),
                )
        return cursor.rowcount > 0


__all__ = [
    "InMemoryScenarioRepository",
    "SQLiteScenarioRepository",
    "ScenarioRecord",
    "ScenarioRepository",
]
