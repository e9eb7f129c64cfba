"""Concurrency tests for the in-memory repository and its lock."""
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from conftest import make_rule, utc
from brand_pricing.engine.exceptions import DuplicateBrandError
from brand_pricing.storage.locks import ReadWriteLock


START = utc(2020, 6, 14, 0, 0, 0)
END = utc(2020, 12, 31, 23, 59, 59)


def test_concurrent_duplicate_registration_only_one_succeeds(memory_repository):
    barrier = threading.Barrier(8)

    def register():
        barrier.wait()
        try:
            memory_repository.add_brand("EXAMPLE")
            return True
        except DuplicateBrandError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: register(), range(8)))

    assert results.count(True) == 1
    assert memory_repository.get_brand("EXAMPLE").id == 1


def test_concurrent_registrations_get_unique_sequential_ids(memory_repository):
    names = [f"BRAND-{i}" for i in range(50)]

    with ThreadPoolExecutor(max_workers=10) as pool:
        list(pool.map(memory_repository.add_brand, names))

    ids = sorted(memory_repository.get_brand(name).id for name in names)
    assert ids == list(range(1, 51))


def test_concurrent_reads_and_writes(memory_repository):
    memory_repository.add_price(make_rule(START, END, priority=0, price=100))

    def write(i):
        memory_repository.add_price(make_rule(START, END, priority=0, price=1000 + i))

    def read(_):
        return memory_repository.get_price(1, 3, START + timedelta(days=1)).price

    with ThreadPoolExecutor(max_workers=8) as pool:
        writes = [pool.submit(write, i) for i in range(100)]
        reads = [pool.submit(read, i) for i in range(100)]
        for future in writes:
            future.result()
        prices = [future.result() for future in reads]

    # Equal priorities: the first rule stored always wins
    assert set(prices) == {100}


def test_read_lock_is_shared():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader():
        with lock.read():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    # Barrier would have broken if the readers excluded each other
    assert not both_inside.broken


def test_write_lock_excludes_readers():
    lock = ReadWriteLock()
    events = []
    writer_inside = threading.Event()
    release_writer = threading.Event()

    def writer():
        with lock.write():
            writer_inside.set()
            release_writer.wait(timeout=5)
            events.append("write-done")

    def reader():
        with lock.read():
            events.append("read")

    w = threading.Thread(target=writer)
    w.start()
    assert writer_inside.wait(timeout=5)

    r = threading.Thread(target=reader)
    r.start()
    r.join(timeout=0.2)
    assert r.is_alive(), "reader entered while the writer held the lock"

    release_writer.set()
    w.join(timeout=5)
    r.join(timeout=5)

    assert events == ["write-done", "read"]


def test_lock_released_after_error():
    lock = ReadWriteLock()

    with pytest.raises(RuntimeError):
        with lock.write():
            raise RuntimeError("boom")

    # Would deadlock if the write side were still held
    with lock.read():
        pass
    with lock.write():
        pass
