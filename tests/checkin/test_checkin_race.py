from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from src.checkin_system.checkin_system.checkin.service import CheckInService
from src.checkin_system.checkin_system.core.exceptions import AlreadyCheckedInError


def test_concurrent_checkins_yield_exactly_one_success(teams_repo, registrations_repo):
    svc = CheckInService(teams_repo, registrations_repo)
    workers = 16
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []

    def attempt(raw_id: str) -> None:
        barrier.wait()
        try:
            svc.check_in(raw_id)
            outcomes.append("ok")
        except AlreadyCheckedInError:
            outcomes.append("already")

    ids = ["H1", " h1", "h1 ", "H1"] * (workers // 4)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for f in [pool.submit(attempt, raw) for raw in ids]:
            f.result()

    assert outcomes.count("ok") == 1
    assert outcomes.count("already") == workers - 1
    assert teams_repo.get_counts().checked_in == 1
    assert len(registrations_repo.list_all()) == 1
