from pathlib import Path

from route_planner.persistence.filesystem import FileStorage


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="route_plan_weekly")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path.resolve() / "outputs"
    assert run_dir.name.startswith("route_plan_weekly_")


def test_run_directory_prefix_is_slugged(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    run_dir = storage.make_run_directory(prefix="route_plan_north/east zone")

    assert run_dir.parent == tmp_path.resolve() / "outputs"
    assert run_dir.name.startswith("route_plan_north-east-zone_")


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory()

    summary_path = run_dir / "summary.json"
    schedule_path = run_dir / "schedule.csv"

    storage.write_json(summary_path, {"status": "complete", "days_planned": 2})
    storage.write_csv(schedule_path, "day_number,outlet_id\r\n1,7\r\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "status": "complete",\n  "days_planned": 2\n}'
    assert schedule_path.read_bytes() == b"day_number,outlet_id\r\n1,7\r\n"


def test_run_directory_name_collision_gets_suffix(tmp_path: Path, monkeypatch) -> None:
    from route_planner.persistence import filesystem

    frozen = filesystem.datetime(2026, 1, 5, 8, 30, tzinfo=filesystem.timezone.utc)

    class FrozenDatetime:
        @staticmethod
        def now(tz=None):
            return frozen

    monkeypatch.setattr(filesystem, "datetime", FrozenDatetime)
    storage = FileStorage(root=tmp_path)

    first = storage.make_run_directory()
    second = storage.make_run_directory()

    assert first.name == "route_plan_20260105T083000000000Z"
    assert second.name == "route_plan_20260105T083000000000Z_2"


def test_save_route_plan_writes_both_artifacts(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    run_dir = storage.save_route_plan({"metadata": {"status": "empty"}, "schedule": []}, "day_number\r\n", label="west")

    assert run_dir.name.startswith("route_plan_west_")
    assert (run_dir / "summary.json").exists()
    assert (run_dir / "schedule.csv").read_bytes() == b"day_number\r\n"
