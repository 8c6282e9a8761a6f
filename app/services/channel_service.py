"""
Provisioning of the "new ride" notification channels.

Two variants are kept side by side:

    provision_channels        one channel per SoundKey, ids "rides_channel_<key>"
    provision_default_channel a single "rides_channel" on the default sound

Channel ids are stable: the platform keys channels by id, so re-registering an
id updates it, while a new id leaves the old channel (and the user's ringtone
choice for it) orphaned.
"""
import logging

from ..schemas.channel import (
    AudioAttributes,
    AudioContentType,
    AudioUsage,
    ChannelScheme,
    ChannelSpec,
    Importance,
    SoundKey,
    SoundReference,
)
from .host import CHANNELS_MIN_SDK, NotificationHost, NotificationManager

logger = logging.getLogger(__name__)

CHANNEL_ID_RIDES = "rides_channel"
CHANNEL_NAME = "Nouvelles courses"
CHANNEL_DESCRIPTION = "Notifications de nouvelles courses"
VIBRATION_PATTERN = (0, 200, 100, 200)  # delay, buzz, pause, buzz (ms)

ALERT_AUDIO_ATTRIBUTES = AudioAttributes(
    usage=AudioUsage.NOTIFICATION,
    content_type=AudioContentType.SONIFICATION,
)


def channel_id_for(key: SoundKey, scheme: ChannelScheme = ChannelScheme.PER_SOUND) -> str:
    if scheme == ChannelScheme.SINGLE:
        return CHANNEL_ID_RIDES
    # "default" is suffixed too: rides_channel_default
    return f"{CHANNEL_ID_RIDES}_{SoundKey(key).value}"


def channel_name_for(key: SoundKey) -> str:
    key = SoundKey(key)
    if key == SoundKey.DEFAULT:
        return CHANNEL_NAME
    return f"{CHANNEL_NAME} - {key.value}"


def resolve_sound(key: SoundKey, host: NotificationHost) -> SoundReference:
    """Bundled resource named like the key, else the platform default sound."""
    key = SoundKey(key)
    if key == SoundKey.DEFAULT:
        return host.resolve_default_notification_sound()

    bundled = host.probe_bundled_resource(key.value)
    if bundled is None:
        logger.info(f"No bundled sound for '{key.value}', using platform default")
        return host.resolve_default_notification_sound()
    return bundled


def build_channel_spec(
    key: SoundKey,
    sound: SoundReference,
    scheme: ChannelScheme = ChannelScheme.PER_SOUND,
) -> ChannelSpec:
    return ChannelSpec(
        channel_id=channel_id_for(key, scheme),
        name=channel_name_for(key),
        description=CHANNEL_DESCRIPTION,
        importance=Importance.HIGH,
        vibration_pattern=VIBRATION_PATTERN,
        lights_enabled=True,
        vibration_enabled=True,
        sound=sound,
        audio_attributes=ALERT_AUDIO_ATTRIBUTES,
    )


def _notification_manager(host: NotificationHost) -> NotificationManager | None:
    """Manager to register with, or None when provisioning must be skipped."""
    if host.sdk_int < CHANNELS_MIN_SDK:
        logger.info(f"API level {host.sdk_int} predates notification channels, skipping")
        return None

    manager = host.get_notification_manager()
    if manager is None:
        logger.info("Notification manager unavailable, skipping channel provisioning")
    return manager


def _register(manager: NotificationManager, key: SoundKey, build) -> ChannelSpec | None:
    """Build and register one channel. A failure is logged and skips only this key."""
    try:
        spec = build()
        manager.create_notification_channel(spec)
    except Exception as e:
        logger.error(f"Registering ride channel for '{key.value}' failed: {e}", exc_info=True)
        return None
    return spec


def provision_channels(host: NotificationHost) -> list[ChannelSpec]:
    """Register one high-importance channel per SoundKey.

    Returns the specs that were registered, in SoundKey order. Nothing is
    registered (and an empty list returned) when the host predates channels or
    has no notification manager. A key whose registration fails is left out of
    the result and the remaining keys are still registered. Safe to call any
    number of times.
    """
    manager = _notification_manager(host)
    if manager is None:
        return []

    registered = []
    for key in SoundKey:
        spec = _register(
            manager,
            key,
            lambda: build_channel_spec(key, resolve_sound(key, host), ChannelScheme.PER_SOUND),
        )
        if spec is not None:
            registered.append(spec)

    logger.info(f"Provisioned {len(registered)} ride channels: {[s.channel_id for s in registered]}")
    return registered


def provision_default_channel(host: NotificationHost) -> list[ChannelSpec]:
    """Register the single "rides_channel" on the platform default sound."""
    manager = _notification_manager(host)
    if manager is None:
        return []

    spec = _register(
        manager,
        SoundKey.DEFAULT,
        lambda: build_channel_spec(
            SoundKey.DEFAULT,
            host.resolve_default_notification_sound(),
            ChannelScheme.SINGLE,
        ),
    )
    if spec is None:
        return []
    logger.info(f"Provisioned ride channel: {spec.channel_id}")
    return [spec]


def provision(host: NotificationHost, scheme: ChannelScheme) -> list[ChannelSpec]:
    if ChannelScheme(scheme) == ChannelScheme.SINGLE:
        return provision_default_channel(host)
    return provision_channels(host)


def skip_reason(host: NotificationHost) -> str | None:
    """Why provisioning would be a no-op on this host, if it would."""
    if host.sdk_int < CHANNELS_MIN_SDK:
        return f"API level {host.sdk_int} < {CHANNELS_MIN_SDK}"
    if host.get_notification_manager() is None:
        return "notification manager unavailable"
    return None


def initialize_notification_channels(host: NotificationHost, scheme: ChannelScheme | str) -> list[ChannelSpec]:
    """Startup entry point. Never raises, so a failure cannot abort startup."""
    try:
        return provision(host, ChannelScheme(scheme))
    except Exception as e:
        logger.error(f"Notification channel provisioning failed: {e}", exc_info=True)
        return []
