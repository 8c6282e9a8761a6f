"""
Host notification subsystem seen by the channel provisioner.

The provisioner never talks to a platform directly: it receives a
NotificationHost, which exposes the API level, the notification manager (or
None when unavailable) and the sound lookups.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..database import SessionLocal
from ..models.notification_channel import NotificationChannel
from ..schemas.channel import ChannelSpec, SoundReference
from ..utils.sound_utils import (
    AUDIO_EXTENSIONS,
    DEFAULT_NOTIFICATION_URI,
    normalize_sound_name,
    raw_resource_uri,
)

logger = logging.getLogger(__name__)

# Build.VERSION_CODES.O, first API level with notification channels
CHANNELS_MIN_SDK = 26


class NotificationManager(ABC):
    @abstractmethod
    def create_notification_channel(self, spec: ChannelSpec) -> None:
        """Create the channel, or update it if spec.channel_id already exists."""


class NotificationHost(ABC):
    sdk_int: int

    @abstractmethod
    def get_notification_manager(self) -> Optional[NotificationManager]:
        ...

    @abstractmethod
    def resolve_default_notification_sound(self) -> SoundReference:
        ...

    @abstractmethod
    def probe_bundled_resource(self, name: str) -> Optional[SoundReference]:
        ...


class DatabaseNotificationManager(NotificationManager):
    """Channel registry persisted in the notification_channels table.

    Mirrors Android's createNotificationChannel: an existing id only gets its
    name and description refreshed. Sound, vibration and importance belong to
    the user once the channel exists and are left untouched.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def create_notification_channel(self, spec: ChannelSpec) -> None:
        db = self.session_factory()
        try:
            existing = (
                db.query(NotificationChannel)
                .filter(NotificationChannel.channel_id == spec.channel_id)
                .first()
            )
            if existing:
                existing.name = spec.name
                existing.description = spec.description
                logger.info(f"Channel already registered, metadata refreshed: {spec.channel_id}")
            else:
                db.add(NotificationChannel(
                    channel_id=spec.channel_id,
                    name=spec.name,
                    description=spec.description,
                    importance=int(spec.importance),
                    vibration_pattern=list(spec.vibration_pattern),
                    lights_enabled=spec.lights_enabled,
                    vibration_enabled=spec.vibration_enabled,
                    sound_uri=spec.sound.uri,
                    audio_usage=int(spec.audio_attributes.usage),
                    audio_content_type=int(spec.audio_attributes.content_type),
                ))
                logger.info(f"New channel registered: {spec.channel_id} ({spec.sound.uri})")
            db.commit()
        except IntegrityError:
            # Another process inserted the same id first; that row wins, but it
            # still gets the current name and description.
            db.rollback()
            winner = (
                db.query(NotificationChannel)
                .filter(NotificationChannel.channel_id == spec.channel_id)
                .first()
            )
            if winner is not None:
                winner.name = spec.name
                winner.description = spec.description
                db.commit()
            logger.warning(f"Channel registered concurrently, metadata refreshed on existing row: {spec.channel_id}")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def list_channels(self) -> list[NotificationChannel]:
        db = self.session_factory()
        try:
            return db.query(NotificationChannel).order_by(NotificationChannel.id).all()
        finally:
            db.close()


class ResourceDirectoryHost(NotificationHost):
    """Host backed by a directory mirroring the app's res/raw folder."""

    def __init__(
        self,
        raw_dir: str | Path,
        package_name: str,
        sdk_int: int,
        notification_manager: Optional[NotificationManager] = None,
    ):
        self.raw_dir = Path(raw_dir)
        self.package_name = package_name
        self.sdk_int = sdk_int
        self.notification_manager = notification_manager

    def get_notification_manager(self) -> Optional[NotificationManager]:
        return self.notification_manager

    def resolve_default_notification_sound(self) -> SoundReference:
        return SoundReference(uri=DEFAULT_NOTIFICATION_URI, is_default=True)

    def probe_bundled_resource(self, name: str) -> Optional[SoundReference]:
        if not self.raw_dir.is_dir():
            return None

        stem = normalize_sound_name(name)
        try:
            for sound_file in self.raw_dir.iterdir():
                if (
                    sound_file.is_file()
                    and sound_file.stem == stem
                    and sound_file.suffix.lower() in AUDIO_EXTENSIONS
                ):
                    return SoundReference(uri=raw_resource_uri(self.package_name, stem))
        except OSError as e:
            logger.warning(f"Cannot read sound directory {self.raw_dir}: {e}")
        return None


def build_host_from_settings() -> ResourceDirectoryHost:
    return ResourceDirectoryHost(
        raw_dir=settings.RAW_SOUNDS_DIR,
        package_name=settings.ANDROID_PACKAGE_NAME,
        sdk_int=settings.PLATFORM_SDK_INT,
        notification_manager=DatabaseNotificationManager(SessionLocal),
    )
