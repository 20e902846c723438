from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from route_planner.main import create_app


def _payload(**overrides) -> dict:
    payload = {
        "totalDays": 2,
        "workingHoursPerDay": 8,
        "maxCountVisists": 5,
        "useFixedStartPoint": False,
        "segments": [
            {"idOutlet1": 1, "idOutlet2": 2, "time": 600, "length": 12.5, "cost": 4,
             "priority1": 1, "priority2": 1, "timeVisit1": 20, "timeVisit2": 0,
             "frequency1": 2, "frequency2": 2, "frequencyPriority1": 0, "frequencyPriority2": 0},
            {"idOutlet1": 2, "idOutlet2": 3, "time": 900, "length": 8, "cost": 6,
             "priority1": 1, "priority2": 2, "timeVisit1": 0, "timeVisit2": 15,
             "frequency1": 2, "frequency2": 1, "frequencyPriority1": 0, "frequencyPriority2": 0},
            {"idOutlet1": 3, "idOutlet2": 1, "time": 700, "length": 9, "cost": 5,
             "priority1": 2, "priority2": 1, "timeVisit1": 15, "timeVisit2": 20,
             "frequency1": 1, "frequency2": 2, "frequencyPriority1": 0, "frequencyPriority2": 0},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def api_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    app = create_app()
    client = TestClient(app)

    # ensure filesystem writes go to tmpdir
    from route_planner.persistence.filesystem import FileStorage
    from route_planner.services.routing import service as routing_service

    monkeypatch.setattr(routing_service, "FileStorage", lambda: FileStorage(root=tmp_path))

    return client


def test_health_endpoint(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_planner_health_reports_constraints(api_client: TestClient):
    response = api_client.get("/api/health/planner")

    assert response.status_code == 200
    constraints = response.json()["constraints"]
    assert constraints["max_distance_limit_km"] == 100.0
    assert constraints["max_route_attempts"] == 50
    assert constraints["start_fallback"] == "first"


def test_root_endpoint_lists_service(api_client: TestClient):
    response = api_client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/api/health"


def test_plan_endpoint_accepts_legacy_field_names(api_client: TestClient, tmp_path: Path):
    response = api_client.post("/api/route-planner/plan", json=_payload(persist=True, run_label="east"))

    assert response.status_code == 200
    payload = response.json()
    assert payload["metadata"]["total_days"] == 2
    assert payload["metadata"]["outlets"] == 3
    assert payload["schedule"]
    for day in payload["schedule"]:
        assert 2 <= day["stop_count"] <= 5
        assert day["points"][0]["travel_time"] == 0
    assert len(payload["records"]) == sum(day["stop_count"] for day in payload["schedule"])

    visit_times = {record["outlet_id"]: record["visit_time"] for record in payload["records"]}
    assert visit_times.get(1, 1200) == 1200
    assert visit_times.get(2, 1800) == 1800

    output_dirs = list((tmp_path / "outputs").glob("route_plan_east_*"))
    assert output_dirs
    assert (output_dirs[0] / "summary.json").exists()
    assert (output_dirs[0] / "schedule.csv").exists()


def test_plan_endpoint_accepts_snake_case_fields(api_client: TestClient):
    body = {
        "total_days": 1,
        "working_hours_per_day": 8,
        "max_visits_per_day": 3,
        "use_fixed_start_point": True,
        "fixed_start_point_id": 2,
        "segments": [
            {"source_id": 2, "dest_id": 1, "travel_time": 300, "distance": 3, "source_frequency": 1, "dest_frequency": 1},
        ],
    }

    response = api_client.post("/api/route-planner/plan", json=body)

    assert response.status_code == 200
    assert [point["outlet_id"] for point in response.json()["schedule"][0]["points"]] == [2, 1]


def test_plan_endpoint_rejects_fixed_flag_without_id(api_client: TestClient):
    response = api_client.post("/api/route-planner/plan", json=_payload(useFixedStartPoint=True, fixedStartPointId=0))

    assert response.status_code == 422


def test_plan_endpoint_rejects_unknown_fixed_start(api_client: TestClient):
    response = api_client.post("/api/route-planner/plan", json=_payload(useFixedStartPoint=True, fixedStartPointId=99))

    assert response.status_code == 400
    assert "99" in response.json()["detail"]


def test_plan_endpoint_rejects_invalid_numbers(api_client: TestClient):
    response = api_client.post("/api/route-planner/plan", json=_payload(totalDays=0))

    assert response.status_code == 422


def test_plan_endpoint_reports_unexpected_errors(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from route_planner.api.routes import planner

    def explode(payload):
        raise RuntimeError("boom")

    monkeypatch.setattr(planner, "generate_schedule", explode)

    response = api_client.post("/api/route-planner/plan", json=_payload())

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]
