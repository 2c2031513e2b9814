import io
import json
import logging

import pandas as pd
import pytest

from gigroute.main import main


JOBS_CSV = (
    "id,title,platform,payout,address,latitude,longitude,estimated_duration,status\n"
    "J1,Costco run,instacart,10,1 Main St,47.60,-122.33,30,available\n"
    "J2,Chipotle pickup,doordash,25,2 Pine St,47.61,-122.34,20,available\n"
    "J3,Store audit,epms,15,3 Oak Ave,47.59,-122.30,40,completed\n"
)


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger("gigroute")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def jobs_file(tmp_path):
    path = tmp_path / "jobs.csv"
    path.write_text(JOBS_CSV)
    return str(path)


def test_parse_text(capsys):
    code = main(["parse", "--text", "Safeway run $22", "--platform", "instacart"])

    draft = json.loads(capsys.readouterr().out)
    assert code == 0
    assert draft["platform"] == "instacart"
    assert draft["payout"] == "22"
    assert draft["address"] == "Local grocery store"


def test_parse_file(tmp_path, capsys):
    path = tmp_path / "posting.txt"
    path.write_text("Pay: $12.50, tip $3.00")

    assert main(["parse", "--file", str(path)]) == 0
    assert json.loads(capsys.readouterr().out)["payout"] == "12.50"


def test_parse_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Earn $9"))

    assert main(["parse"]) == 0
    assert json.loads(capsys.readouterr().out)["payout"] == "9"


def test_optimize_writes_route(jobs_file, tmp_path, capsys):
    output = tmp_path / "route.csv"

    code = main([
        "optimize", "--jobs", jobs_file,
        "--start-lat", "47.60", "--start-lng", "-122.33",
        "--output", str(output)
    ])

    assert code == 0
    assert "Route over 3 jobs" in capsys.readouterr().out
    df = pd.read_csv(output, dtype={"job_id": str})
    assert list(df["job_id"]) == ["J1", "J2", "J3", "TOTAL"]


def test_optimize_platform_filter(jobs_file, capsys):
    assert main(["optimize", "--jobs", jobs_file, "--platform", "doordash"]) == 0
    assert "Route over 1 jobs" in capsys.readouterr().out


def test_list_sorted_by_payout(jobs_file, capsys):
    assert main(["list", "--jobs", jobs_file, "--sort", "payout"]) == 0

    out = capsys.readouterr().out
    assert out.index("Chipotle pickup") < out.index("Store audit") < out.index("Costco run")
    assert "3 job(s)" in out


def test_summary(jobs_file, tmp_path, capsys):
    output = tmp_path / "summary.csv"

    assert main(["summary", "--jobs", jobs_file, "--output", str(output)]) == 0
    assert "3 jobs | 1 completed | 2 pending" in capsys.readouterr().out
    assert output.exists()


def test_missing_jobs_file_fails(tmp_path):
    assert main(["summary", "--jobs", str(tmp_path / "missing.csv")]) == 1


def test_watch_requires_config(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml"), "watch"]) == 1


def test_watch_without_enabled_workers(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("log_level: INFO\nworkers: []\n")

    assert main(["--config", str(config), "watch"]) == 0


def test_invalid_config_fails(tmp_path, jobs_file):
    config = tmp_path / "config.yaml"
    config.write_text("optimizer:\n  average_speed_kmh: 0\n")

    assert main(["--config", str(config), "optimize", "--jobs", jobs_file]) == 1


def test_watch_once_drains_inbox(tmp_path):
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    (inbox / "instacart_1.txt").write_text("Safeway run $22")

    config = tmp_path / "config.yaml"
    config.write_text(
        f"output_dir: '{tmp_path / 'out'}'\n"
        "workers:\n"
        "  - name: shared\n"
        "    type: inbox\n"
        "    config:\n"
        f"      inbox_dir: '{inbox}'\n"
        "      use_cache: false\n"
    )

    assert main(["--config", str(config), "watch", "--once"]) == 0

    df = pd.read_csv(tmp_path / "out" / "drafts.csv")
    assert list(df["platform"]) == ["instacart"]
    assert (inbox / "processed" / "instacart_1.txt").exists()
