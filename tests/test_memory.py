from kodiconf.adapters import memory


def test_total_memory_reads_psutil():
    assert memory.SystemMemoryAdapter().total_memory() > 0


def test_total_memory_failure_is_zero(monkeypatch):
    def broken():
        raise OSError("no /proc")

    monkeypatch.setattr(memory.psutil, "virtual_memory", broken)
    assert memory.SystemMemoryAdapter().total_memory() == 0
