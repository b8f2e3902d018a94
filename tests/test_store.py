import threading

from kodiconf.core.config_model import Configuration
from kodiconf.core.store import ConfigStore, ReadWriteLock


def _snapshot(i: int) -> Configuration:
    return Configuration(download_path=f"/d/{i}", memory_size=i, proxy_port=i, language=str(i))


def test_replace_returns_previous_snapshot():
    first, second = _snapshot(1), _snapshot(2)
    store = ConfigStore()
    assert store.get() is None

    assert store.replace(first) is None
    assert store.get() is first
    assert store.replace(second) is first
    assert store.get() is second


def test_readers_never_see_mixed_snapshots():
    store = ConfigStore(_snapshot(0))
    stop = threading.Event()
    errors = []

    def reader():
        while not stop.is_set():
            config = store.get()
            i = config.memory_size
            if (config.download_path, config.proxy_port, config.language) != (f"/d/{i}", i, str(i)):
                errors.append(config)

    readers = [threading.Thread(target=reader) for _ in range(8)]
    for thread in readers:
        thread.start()
    for i in range(1, 2000):
        store.replace(_snapshot(i))
    stop.set()
    for thread in readers:
        thread.join(timeout=5)

    assert errors == []
    assert store.get().memory_size == 1999


def test_reader_keeps_old_snapshot_after_swap():
    store = ConfigStore(_snapshot(1))
    held = store.get()
    store.replace(_snapshot(2))
    assert held.memory_size == 1
    assert store.get().memory_size == 2


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    written = threading.Event()

    def writer():
        with lock.write_locked():
            written.set()

    with lock.read_locked():
        thread = threading.Thread(target=writer)
        thread.start()
        assert not written.wait(0.1)
    assert written.wait(5)
    thread.join(timeout=5)


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader():
        with lock.read_locked():
            entered.set()

    with lock.read_locked():
        thread = threading.Thread(target=reader)
        thread.start()
        assert entered.wait(5)
    thread.join(timeout=5)
