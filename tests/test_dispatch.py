from __future__ import annotations

import threading

from dispatch import ImmediateDispatcher, SerialDispatcher


def test_immediate_dispatcher_runs_inline() -> None:
    calls: list[int] = []
    dispatcher = ImmediateDispatcher()

    dispatcher.post(lambda: calls.append(1))

    assert calls == [1]


def test_serial_dispatcher_defers_until_drain() -> None:
    calls: list[int] = []
    dispatcher = SerialDispatcher()

    dispatcher.post(lambda: calls.append(1))
    dispatcher.post(lambda: calls.append(2))

    assert calls == []
    assert dispatcher.pending == 2
    assert dispatcher.drain() == 2
    assert calls == [1, 2]
    assert dispatcher.drain() == 0


def test_serial_dispatcher_runs_work_posted_during_drain() -> None:
    calls: list[str] = []
    dispatcher = SerialDispatcher()

    def first() -> None:
        calls.append("first")
        dispatcher.post(lambda: calls.append("nested"))

    dispatcher.post(first)
    dispatcher.drain()

    assert calls == ["first", "nested"]


def test_serial_dispatcher_keeps_per_thread_order() -> None:
    dispatcher = SerialDispatcher()
    seen: list[int] = []

    def producer() -> None:
        for i in range(200):
            dispatcher.post(lambda i=i: seen.append(i))

    worker = threading.Thread(target=producer)
    worker.start()
    worker.join()
    dispatcher.drain()

    assert seen == list(range(200))
