from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from invoiceroi.backend.app.models import ScenarioInput
from invoiceroi.backend.app.services.calculation_service import compute
from invoiceroi.backend.app.services.scenario_store import (
    InMemoryScenarioRepository,
    SQLiteScenarioRepository,
)


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def advance(self, delta: timedelta) -> None:
        self.current += delta

    def __call__(self) -> datetime:
        return self.current


def _scenario(**overrides: float) -> tuple[ScenarioInput, object]:
    inputs = ScenarioInput.model_validate(
        {
            "monthly_invoice_volume": 2000,
            "num_ap_staff": 3,
            "avg_hours_per_invoice": 0.17,
            "hourly_wage": 25,
            "one_time_implementation_cost": 50000,
            **overrides,
        }
    )
    return inputs, compute(inputs)


@pytest.fixture(params=["memory", "sqlite"])
def repository(request: pytest.FixtureRequest, tmp_path: Path):
    clock = FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    if request.param == "memory":
        return InMemoryScenarioRepository(clock=clock)
    return SQLiteScenarioRepository(tmp_path / "scenarios.db", clock=clock)


def test_save_and_get_round_trip(repository) -> None:
    inputs, result = _scenario()

    record = repository.save("Baseline", inputs, result)
    fetched = repository.get(record.id)

    assert fetched.name == "Baseline"
    assert fetched.inputs == inputs
    assert fetched.result == result
    assert fetched.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_ids_increase_and_list_is_newest_first(repository) -> None:
    first = repository.save("first", *_scenario())
    second = repository.save("second", *_scenario(num_ap_staff=4))

    assert second.id > first.id
    assert [record.name for record in repository.list()] == ["second", "first"]


def test_missing_scenario_raises_key_error(repository) -> None:
    with pytest.raises(KeyError):
        repository.get(999)


def test_delete_reports_whether_a_record_was_removed(repository) -> None:
    record = repository.save("doomed", *_scenario())

    assert repository.delete(record.id) is True
    assert repository.delete(record.id) is False
    with pytest.raises(KeyError):
        repository.get(record.id)


def test_unbounded_roi_survives_storage(repository) -> None:
    record = repository.save("free rollout", *_scenario(one_time_implementation_cost=0))

    fetched = repository.get(record.id)

    assert fetched.result.roi_defined is False
    assert fetched.to_payload()["roi_percentage"] is None


def test_record_payload_flattens_inputs_and_results(repository) -> None:
    record = repository.save("flat", *_scenario())

    payload = record.to_payload()

    assert payload["id"] == record.id
    assert payload["scenario_name"] == "flat"
    assert payload["time_horizon_months"] == 36
    assert payload["monthly_savings"] == 28490.0
    assert payload["created_at"] == "2024-01-01T00:00:00+00:00"


def test_in_memory_repository_enforces_capacity() -> None:
    repository = InMemoryScenarioRepository(max_items=2)

    first = repository.save("a", *_scenario())
    second = repository.save("b", *_scenario())
    third = repository.save("c", *_scenario())

    with pytest.raises(KeyError):
        repository.get(first.id)
    assert [record.id for record in repository.list()] == [third.id, second.id]


def test_sqlite_repository_enforces_capacity(tmp_path: Path) -> None:
    repository = SQLiteScenarioRepository(tmp_path / "scenarios.db", max_items=2)

    first = repository.save("a", *_scenario())
    repository.save("b", *_scenario())
    repository.save("c", *_scenario())

    with pytest.raises(KeyError):
        repository.get(first.id)
    assert len(repository.list()) == 2


def test_sqlite_repository_persists_records(tmp_path: Path) -> None:
    db_path = tmp_path / "scenarios.db"
    record = SQLiteScenarioRepository(db_path).save("kept", *_scenario())

    # A fresh repository instance should read the persisted record.
    fresh = SQLiteScenarioRepository(db_path)

    assert fresh.get(record.id).name == "kept"


@pytest.mark.parametrize("max_items", [0, -1])
def test_capacity_must_be_positive(max_items: int, tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        InMemoryScenarioRepository(max_items=max_items)
    with pytest.raises(ValueError):
        SQLiteScenarioRepository(tmp_path / "scenarios.db", max_items=max_items)


def test_sqlite_repository_is_thread_safe(tmp_path: Path) -> None:
    repository = SQLiteScenarioRepository(tmp_path / "scenarios.db")

    def worker(index: int) -> int:
        record = repository.save(f"scenario {index}", *_scenario(num_ap_staff=index))
        fetched = repository.get(record.id)
        assert fetched.inputs.num_ap_staff == index
        return record.id

    with ThreadPoolExecutor(max_workers=4) as executor:
        ids = list(executor.map(worker, range(12)))

    assert len(set(ids)) == 12
