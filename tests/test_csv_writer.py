from datetime import datetime

import pandas as pd

from gigroute.models.route import Coordinate
from gigroute.services.route_optimizer import optimize_route
from gigroute.utils.csv_writer import safe_write_csv, write_route_csv


def test_creates_file_and_directory(tmp_path):
    target = tmp_path / "out" / "drafts.csv"

    assert safe_write_csv(str(target), [{"title": "a", "text_hash": "h1"}])

    df = pd.read_csv(target)
    assert list(df["title"]) == ["a"]


def test_appends_and_dedupes(tmp_path):
    target = tmp_path / "drafts.csv"

    safe_write_csv(str(target), [{"title": "a", "text_hash": "h1"}], dedupe_on=["text_hash"])
    safe_write_csv(
        str(target),
        [{"title": "a again", "text_hash": "h1"}, {"title": "b", "text_hash": "h2"}],
        dedupe_on=["text_hash"]
    )

    df = pd.read_csv(target)
    assert list(df["title"]) == ["a", "b"]


def test_without_dedupe_keeps_everything(tmp_path):
    target = tmp_path / "drafts.csv"

    safe_write_csv(str(target), [{"title": "a"}])
    safe_write_csv(str(target), [{"title": "a"}])

    assert len(pd.read_csv(target)) == 2


def test_empty_data_is_a_no_op(tmp_path):
    target = tmp_path / "drafts.csv"

    assert safe_write_csv(str(target), [])
    assert not target.exists()


def test_write_route_csv(make_job, tmp_path):
    jobs = [
        make_job(id="J1", payout=10, duration=30, lat=47.60, lng=-122.33),
        make_job(id="J2", payout=25, duration=20, lat=47.61, lng=-122.34),
    ]
    route = optimize_route(jobs, Coordinate(47.60, -122.33), datetime(2024, 5, 1, 9, 0))
    target = tmp_path / "route.csv"

    assert write_route_csv(route, str(target))

    df = pd.read_csv(target, dtype={"job_id": str})
    assert list(df["job_id"]) == ["J1", "J2", "TOTAL"]
    assert df["payout"].iloc[-1] == 35
    assert df["estimated_arrival"].iloc[0] == "2024-05-01T09:00:00"


def test_write_route_csv_replaces_existing_file(make_job, tmp_path):
    target = tmp_path / "route.csv"
    target.write_text("stale\n")
    route = optimize_route([make_job(id="only")], start_time=datetime(2024, 5, 1, 9, 0))

    assert write_route_csv(route, str(target))
    assert "stale" not in target.read_text()
