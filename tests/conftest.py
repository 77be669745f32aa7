import sys
from pathlib import Path

import pytest

ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from factories import FakeStore, Upstream  # noqa: E402
from proftafla.fetcher import ScheduleFetcher  # noqa: E402
from proftafla.service import ScheduleService  # noqa: E402
from proftafla.storage import ScheduleCache  # noqa: E402


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def make_service(store, upstream):
    def _make(ttl=60, prefix='proftafla'):
        return ScheduleService(
            cache=ScheduleCache(store),
            fetcher=ScheduleFetcher(transport=upstream.transport()),
            ttl=ttl,
            prefix=prefix,
        )
    return _make


@pytest.fixture
def service(make_service):
    return make_service()
