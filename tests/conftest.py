import pytest

from kodiconf.core.coercion import RawSetting
from kodiconf.core.config_model import AddonInfo, PlatformInfo
from kodiconf.core.ports import AddonHost, HostUI


class FakeHost(AddonHost):
    def __init__(self, root, strings=None, settings=None, platform=None, language="en"):
        self.root = root
        self.strings = dict(strings or {})
        self.settings = list(settings or [])
        self.platform = platform or PlatformInfo(os="linux")
        self.language = language

    def get_addon_info(self) -> AddonInfo:
        return AddonInfo(
            id="plugin.video.test",
            name="Test",
            version="1.0.0",
            path="special://home/addons/plugin.video.test",
            profile="special://home/userdata/addon_data/plugin.video.test",
            home="special://home",
            xbmc="special://xbmc",
            icon="special://home/addons/plugin.video.test/icon.png",
        )

    def translate_path(self, path: str) -> str:
        if path == "special://temp":
            return str(self.root / "temp")
        if path == "special://xbmc":
            return str(self.root / "xbmc")
        return path.replace("special://home", str(self.root / "home"))

    def get_platform(self) -> PlatformInfo:
        return self.platform

    def get_language_code(self) -> str:
        return self.language

    def get_setting_string(self, key: str) -> str:
        return self.strings.get(key, "")

    def get_all_settings(self) -> list[RawSetting]:
        return list(self.settings)


class FakeUI(HostUI):
    def __init__(self, open_polls=0, confirm=True):
        self.calls = []
        self.open_polls = open_polls
        self.confirm_answer = confirm

    def open_settings(self) -> None:
        self.calls.append(("open_settings",))

    def dialog(self, title: str, message: str) -> None:
        self.calls.append(("dialog", title, message))

    def is_settings_open(self) -> bool:
        self.calls.append(("is_settings_open",))
        if self.open_polls:
            self.open_polls -= 1
            return True
        return False

    def notify(self, title: str, message: str, icon: str = "") -> None:
        self.calls.append(("notify", title, message, icon))

    def confirm(self, title: str, message: str) -> bool:
        self.calls.append(("confirm", title, message))
        return self.confirm_answer


@pytest.fixture
def fake_host(tmp_path):
    downloads = tmp_path / "downloads"
    downloads.mkdir()
    return FakeHost(tmp_path, strings={"download_path": f"{downloads}/", "library_path": ""})


@pytest.fixture
def fake_ui():
    return FakeUI()
