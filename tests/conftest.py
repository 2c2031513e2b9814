import pytest

from gigroute.models.job import Job


@pytest.fixture
def make_job():
    counter = {"n": 0}

    def _make(payout=10.0, duration=30, lat=None, lng=None, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("id", f"job-{counter['n']}")
        kwargs.setdefault("title", f"Job {counter['n']}")
        kwargs.setdefault("address", "Job location")
        return Job(
            payout=payout,
            estimated_duration=duration,
            latitude=lat,
            longitude=lng,
            **kwargs
        )

    return _make
