"""
Unit tests for the worker thread pool.
"""

import threading
import time

import pytest

from chirpy.core import ThreadPool


@pytest.fixture
def pool():
    pool = ThreadPool(min_workers=2, max_workers=4, queue_size=10)
    pool.start()
    yield pool
    pool.shutdown(wait=True, timeout=5.0)


class TestThreadPool:

    def test_runs_submitted_tasks(self, pool):
        done = threading.Event()
        results = []

        def task(value):
            results.append(value)
            done.set()

        assert pool.submit(task, args=(42,)) is True
        assert done.wait(timeout=5.0)
        assert results == [42]

    def test_failing_task_does_not_kill_worker(self, pool):
        done = threading.Event()

        def boom():
            raise RuntimeError("boom")

        pool.submit(boom)
        pool.submit(done.set)

        assert done.wait(timeout=5.0)

    def test_submit_before_start_raises(self):
        with pytest.raises(RuntimeError):
            ThreadPool().submit(print)

    def test_full_queue_rejects_without_blocking(self):
        pool = ThreadPool(min_workers=1, max_workers=1, queue_size=1)
        pool.start()
        release = threading.Event()
        started = threading.Event()

        def blocker():
            started.set()
            release.wait(timeout=5.0)

        try:
            pool.submit(blocker)
            assert started.wait(timeout=5.0)
            assert pool.submit(blocker, block=False) is True   # fills the queue
            assert pool.submit(blocker, block=False) is False
        finally:
            release.set()
            pool.shutdown(wait=True, timeout=5.0)

    def test_stats(self, pool):
        stats = pool.stats

        assert stats["workers"]["total"] == 2
        assert stats["tasks"]["queued"] == 0

    def test_shutdown_is_idempotent(self):
        pool = ThreadPool(min_workers=1, max_workers=1)
        pool.start()
        pool.shutdown()
        pool.shutdown()

        with pytest.raises(RuntimeError):
            pool.submit(print)

    def test_stale_task_is_handed_to_on_stale(self):
        pool = ThreadPool(min_workers=1, max_workers=1, queue_size=5)
        pool.start()
        release = threading.Event()
        started = threading.Event()
        rejected = threading.Event()
        ran = []
        released = []

        def blocker():
            started.set()
            release.wait(timeout=5.0)

        def on_stale(resource):
            released.append(resource)
            rejected.set()

        try:
            pool.submit(blocker)
            assert started.wait(timeout=5.0)
            pool.submit(ran.append, args=("conn",), timeout=0.05, on_stale=on_stale)
            time.sleep(0.2)
            release.set()

            assert rejected.wait(timeout=5.0)
            assert released == ["conn"]
            assert ran == []
        finally:
            release.set()
            pool.shutdown(wait=True, timeout=5.0)

    def test_fresh_task_skips_on_stale(self, pool):
        done = threading.Event()
        stale = []

        pool.submit(done.set, timeout=5.0, on_stale=stale.append)

        assert done.wait(timeout=5.0)
        assert stale == []
