import io
import threading

import pytest
from PIL import Image

from pipup import create_app
from pipup.realtime.popup_manager import PopupManager


class FakeSurface:
    """Display surface that reports every call to its recorder."""

    def __init__(self, recorder: "SurfaceRecorder", index: int) -> None:
        self.recorder = recorder
        self.index = index
        self.props = None
        self.placement = None

    def create(self) -> None:
        self.recorder.record("create", self)

    def render(self, props, placement) -> None:
        self.recorder.record("render", self)
        self.props = props
        self.placement = placement

    def destroy(self) -> None:
        self.recorder.record("destroy", self)


class SurfaceRecorder:
    """Surface factory that remembers the surfaces it handed out."""

    def __init__(self) -> None:
        self.events: list[tuple[str, int]] = []
        self.surfaces: list[FakeSurface] = []
        self.fail_on: str | None = None
        self.destroyed = threading.Event()
        self._lock = threading.Lock()

    def __call__(self) -> FakeSurface:
        surface = FakeSurface(self, len(self.surfaces))
        self.surfaces.append(surface)
        return surface

    def record(self, action: str, surface: FakeSurface) -> None:
        with self._lock:
            self.events.append((action, surface.index))
        if action == "destroy":
            self.destroyed.set()
        if action == self.fail_on:
            raise RuntimeError(f"surface {action} failed")

    def count(self, action: str) -> int:
        with self._lock:
            return sum(1 for name, _ in self.events if name == action)


@pytest.fixture
def recorder() -> SurfaceRecorder:
    return SurfaceRecorder()


@pytest.fixture
def popup_manager(recorder):
    manager = PopupManager(recorder)
    manager.start()
    yield manager
    manager.shutdown()


@pytest.fixture
def app(recorder):
    app = create_app({"TESTING": True, "LOG_LEVEL": "DEBUG"}, surface_factory=recorder)
    yield app
    app.extensions["popup_manager"].shutdown()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def manager(app) -> PopupManager:
    return app.extensions["popup_manager"]


@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 3), color=(255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()
