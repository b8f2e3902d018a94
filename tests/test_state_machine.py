from kodiconf.core.state_machine import ReloadEvent, ReloadState, ReloadStateMachine


def test_state_machine_happy_path():
    sm = ReloadStateMachine()
    assert sm.state == ReloadState.IDLE

    sm.transition(ReloadEvent.START)
    assert sm.state == ReloadState.RESOLVING_PATHS

    sm.transition(ReloadEvent.PATHS_RESOLVED)
    assert sm.state == ReloadState.VALIDATING_PATHS

    sm.transition(ReloadEvent.PATHS_VALID)
    assert sm.state == ReloadState.FETCHING_SETTINGS

    sm.transition(ReloadEvent.SETTINGS_FETCHED)
    assert sm.state == ReloadState.COERCING

    sm.transition(ReloadEvent.COERCED)
    assert sm.state == ReloadState.DERIVING

    sm.transition(ReloadEvent.DERIVED)
    assert sm.state == ReloadState.PUBLISHING

    sm.transition(ReloadEvent.PUBLISHED)
    assert sm.state == ReloadState.IDLE


def test_state_machine_abort_reset():
    sm = ReloadStateMachine()
    sm.transition(ReloadEvent.START)
    sm.transition(ReloadEvent.PATHS_RESOLVED)
    sm.transition(ReloadEvent.PATHS_INVALID)
    assert sm.state == ReloadState.ABORTED

    sm.transition(ReloadEvent.RESET)
    assert sm.state == ReloadState.IDLE


def test_state_machine_ignores_invalid_transition(caplog):
    sm = ReloadStateMachine()
    sm.transition(ReloadEvent.PUBLISHED)
    assert sm.state == ReloadState.IDLE
    assert "Invalid state transition" in caplog.text
