from threading import Thread

from podtato.readiness import ReadinessGate, open_gate_async


def test_gate_starts_closed():
    gate = ReadinessGate()
    assert gate.is_ready() is False
    assert gate.wait(timeout=0.01) is False


def test_open_gate_async_flips_once():
    gate = ReadinessGate()
    thr = open_gate_async(gate)
    thr.join(timeout=2.0)
    assert gate.is_ready() is True

    # A second flip changes nothing.
    gate.mark_ready()
    assert gate.is_ready() is True


def test_concurrent_readers_see_the_flip():
    gate = ReadinessGate()
    results = []
    readers = [Thread(target=lambda: results.append(gate.wait(timeout=2.0))) for _ in range(8)]
    for t in readers:
        t.start()
    gate.mark_ready()
    for t in readers:
        t.join(timeout=2.0)
    assert results == [True] * 8
