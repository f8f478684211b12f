"""
Concurrency properties of the manager + in-memory storage.

Goal:
    Run real threads against one ShortenerManager and check that:
      - racing creates for one URL produce exactly one record and one code
      - concurrent resolves never lose an increment
      - many distinct URLs get distinct codes

Notes:
    A Barrier releases all workers at once to maximise overlap, and the
    slow strategy below widens the window between the fast-path lookup
    and the insert, which is exactly where a check-then-insert race lives.
"""

import re
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from url_shortener.manager.shortener_manager import ShortenerManager
from url_shortener.manager.strategies import RandomStrategy

CODE_PATTERN = re.compile(r"^[a-zA-Z0-9]{6}$")


class SlowRandomStrategy(RandomStrategy):
    """Random codes, but every generation yields the GIL for a moment."""

    def generate(self, url, *, length=None):
        time.sleep(0.002)
        return super().generate(url, length=length)


def _run_concurrently(n, fn):
    barrier = threading.Barrier(n)

    def worker(i):
        barrier.wait()
        return fn(i)

    with ThreadPoolExecutor(max_workers=n) as pool:
        return list(pool.map(worker, range(n)))


def test_concurrent_creates_same_url_yield_one_record(storage):
    manager = ShortenerManager(storage=storage, code_strategy=SlowRandomStrategy())
    url = "https://example.com/concurrent"

    results = _run_concurrently(32, lambda i: manager.create_short_url(url))

    codes = {m.short_code for m in results}
    assert len(codes) == 1
    assert len(storage) == 1
    assert storage.find_by_url(url).short_code == codes.pop()


def test_concurrent_creates_equivalent_inputs_share_code(storage):
    manager = ShortenerManager(storage=storage, code_strategy=SlowRandomStrategy())
    inputs = ["example.com/x", "http://example.com/x"]

    results = _run_concurrently(20, lambda i: manager.create_short_url(inputs[i % 2]))

    assert len({m.short_code for m in results}) == 1
    assert len(storage) == 1


def test_concurrent_resolves_count_exactly(manager):
    code = manager.create_short_url("https://www.google.com").short_code

    _run_concurrently(100, lambda i: manager.resolve(code))

    assert manager.get_stats(code).access_count == 100


def test_concurrent_resolves_and_stats_mix(manager):
    code = manager.create_short_url("https://www.google.com").short_code

    def op(i):
        return manager.resolve(code) if i % 2 == 0 else manager.get_stats(code)

    results = _run_concurrently(60, op)

    assert manager.get_stats(code).access_count == 30
    assert all(0 <= m.access_count <= 30 for m in results)


def test_uniqueness_at_scale(manager, storage):
    codes = [manager.create_short_url(f"https://example{i}.com").short_code for i in range(1000)]

    assert len(set(codes)) == 1000
    assert all(CODE_PATTERN.match(c) for c in codes)
    assert len(storage) == 1000


def test_concurrent_distinct_creates_are_all_stored(manager, storage):
    results = _run_concurrently(50, lambda i: manager.create_short_url(f"https://site{i}.example.org"))

    assert len({m.short_code for m in results}) == 50
    assert len(storage) == 50
    for i, m in enumerate(results):
        assert m.original_url == f"https://site{i}.example.org"
