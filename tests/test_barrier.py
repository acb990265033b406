import threading

from prosim.barrier import Barrier


def _start(target, n):
    threads = [threading.Thread(target=target, daemon=True) for _ in range(n)]
    for t in threads:
        t.start()
    return threads


def test_single_party_never_blocks():
    b = Barrier(1)
    b.wait()
    b.wait()
    assert b.waiting == 0


def test_all_parties_pass_together():
    b = Barrier(3)
    passed = []
    lock = threading.Lock()

    def worker():
        b.wait()
        with lock:
            passed.append(1)

    threads = _start(worker, 3)
    for t in threads:
        t.join(timeout=5)
    assert all(not t.is_alive() for t in threads)
    assert len(passed) == 3
    assert b.waiting == 0


def test_barrier_is_reusable_across_rounds():
    b = Barrier(2)
    rounds = 5
    counts = [0, 0]
    gaps = []
    lock = threading.Lock()

    def worker(idx):
        for _ in range(rounds):
            counts[idx] += 1
            b.wait()
            with lock:
                gaps.append(abs(counts[0] - counts[1]))

    threads = [threading.Thread(target=worker, args=(i,), daemon=True) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert all(not t.is_alive() for t in threads)
    assert counts == [rounds, rounds]
    assert len(gaps) == 2 * rounds
    assert max(gaps) <= 1
    assert b.waiting == 0
    assert b.parties == 2


def test_done_releases_waiting_threads():
    b = Barrier(2)
    released = threading.Event()

    def worker():
        b.wait()
        released.set()

    (t,) = _start(worker, 1)
    while b.waiting != 1:
        pass
    assert not released.is_set()
    b.done()
    t.join(timeout=5)
    assert released.is_set()
    assert b.parties == 1
    assert b.waiting == 0


def test_done_reduces_parties():
    b = Barrier(3)
    b.done()
    b.done()
    assert b.parties == 1
    b.wait()
    assert b.waiting == 0