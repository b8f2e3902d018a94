import logging
import threading

import pytest

import kodiconf.main as main_module
from kodiconf.core.config_model import Configuration
from kodiconf.core.errors import PathNotSet
from kodiconf.core.reconciler import MESSAGE_PATH_NOT_SET, ReloadResult


class _Reconciler:
    def __init__(self, result):
        self.result = result

    def reload(self):
        return self.result


def test_reload_or_exit_returns_config(fake_ui):
    config = Configuration(download_path="/d")

    assert main_module.reload_or_exit(_Reconciler(ReloadResult(config=config)), fake_ui) is config
    assert fake_ui.calls == []


def test_reload_or_exit_waits_for_settings_then_exits(fake_ui):
    fake_ui.open_polls = 2
    result = ReloadResult(error=PathNotSet(), message=MESSAGE_PATH_NOT_SET)

    with pytest.raises(SystemExit) as exc:
        main_module.reload_or_exit(
            _Reconciler(result), fake_ui, title="Addon", poll_interval=0, exit_code=5
        )

    assert exc.value.code == 5
    assert fake_ui.calls == [
        ("open_settings",),
        ("dialog", "Addon", MESSAGE_PATH_NOT_SET),
        ("is_settings_open",),
        ("is_settings_open",),
        ("is_settings_open",),
    ]


def test_setup_logging_is_idempotent():
    root = logging.getLogger("kodiconf")
    saved = (list(root.handlers), root.level, root.propagate)
    try:
        main_module.setup_logging("debug")
        main_module.setup_logging(logging.DEBUG)
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

        main_module.setup_logging("not-a-level")
        assert root.level == logging.INFO
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved[0]:
            root.addHandler(handler)
        root.setLevel(saved[1])
        root.propagate = saved[2]
        if hasattr(root, "_kodiconf_level"):
            del root._kodiconf_level


def test_reload_or_exit_refuses_worker_thread(fake_ui):
    result = ReloadResult(error=PathNotSet(), message=MESSAGE_PATH_NOT_SET)
    errors = []

    def worker():
        try:
            main_module.reload_or_exit(_Reconciler(result), fake_ui, poll_interval=0)
        except BaseException as e:
            errors.append(e)

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join(timeout=5)

    assert len(errors) == 1
    assert isinstance(errors[0], RuntimeError)
    assert fake_ui.calls == []
