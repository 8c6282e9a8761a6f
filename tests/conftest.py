"""
Shared fixtures.

The environment is configured before any ``app`` module is imported, because
``app.config.Settings`` reads it at import time.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="ride-channels-tests-"))
os.environ["DB_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["RAW_SOUNDS_DIR"] = str(_TMP / "raw")
os.environ["ANDROID_PACKAGE_NAME"] = "com.vtcdispatch.app"
os.environ["PLATFORM_SDK_INT"] = "34"
os.environ["CHANNEL_SCHEME"] = "per_sound"
os.environ["API_KEY"] = "test-key"
os.environ.pop("FIREBASE_CREDENTIALS", None)

import pytest

from app.database import Base, engine
from app.models import notification_channel  # noqa: F401
from app.schemas.channel import ChannelSpec, SoundReference
from app.services.host import NotificationHost, NotificationManager
from app.utils.sound_utils import DEFAULT_NOTIFICATION_URI, raw_resource_uri


class FakeNotificationManager(NotificationManager):
    """In-memory registry with create-or-update semantics keyed by id."""

    def __init__(self):
        self.calls: list[ChannelSpec] = []
        self.channels: dict[str, ChannelSpec] = {}

    def create_notification_channel(self, spec: ChannelSpec) -> None:
        self.calls.append(spec)
        self.channels[spec.channel_id] = spec


class FakeHost(NotificationHost):
    def __init__(self, sdk_int=34, manager=None, bundled=(), package="com.vtcdispatch.app"):
        self.sdk_int = sdk_int
        self.manager = manager
        self.bundled = set(bundled)
        self.package = package
        self.probes: list[str] = []

    def get_notification_manager(self):
        return self.manager

    def resolve_default_notification_sound(self):
        return SoundReference(uri=DEFAULT_NOTIFICATION_URI, is_default=True)

    def probe_bundled_resource(self, name):
        self.probes.append(name)
        if name in self.bundled:
            return SoundReference(uri=raw_resource_uri(self.package, name))
        return None


@pytest.fixture
def manager():
    return FakeNotificationManager()


@pytest.fixture
def host(manager):
    return FakeHost(manager=manager, bundled={"alert1"})


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def raw_dir():
    """Empty res/raw mirror the settings point to."""
    path = Path(os.environ["RAW_SOUNDS_DIR"])
    shutil.rmtree(path, ignore_errors=True)
    path.mkdir(parents=True)
    yield path
    shutil.rmtree(path, ignore_errors=True)
