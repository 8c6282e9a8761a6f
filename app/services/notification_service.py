import logging
from pathlib import Path

import firebase_admin
from firebase_admin import credentials, messaging

from ..config import settings
from ..schemas.channel import ChannelScheme, SoundKey
from ..utils.sound_utils import normalize_sound_name
from .channel_service import channel_id_for

logger = logging.getLogger(__name__)


def init_firebase() -> bool:
    """Initialise the Firebase Admin SDK once. Returns False when not configured."""
    if firebase_admin._apps:
        return True

    if not settings.FIREBASE_CREDENTIALS:
        logger.warning("FIREBASE_CREDENTIALS not set; push sending disabled")
        return False

    service_account_path = Path(settings.FIREBASE_CREDENTIALS)
    if not service_account_path.exists():
        logger.warning(f"Firebase service account file not found at {service_account_path}")
        return False

    try:
        firebase_admin.initialize_app(credentials.Certificate(str(service_account_path)))
    except ValueError as e:
        logger.error(f"Error initializing Firebase: {e}")
        return False

    logger.info("✅ Firebase Admin SDK initialized successfully")
    return True


def android_sound_name(sound_key: SoundKey) -> str:
    """Sound value for the FCM Android payload: the res/raw name, or "default"."""
    return normalize_sound_name(SoundKey(sound_key).value)


def build_ride_message(
    to: str,
    title: str,
    body: str,
    sound_key: SoundKey = SoundKey.DEFAULT,
    scheme: ChannelScheme | str | None = None,
    data=None,
) -> messaging.Message:
    """Build a push for a new ride, addressed to the provisioned channel.

    Args:
        to: Topic (e.g., "/topics/drivers") or device token
        title: Notification title
        body: Notification body
        sound_key: Alert sound chosen by the driver
        scheme: Channel scheme the app provisioned (defaults to settings)
        data: Additional data payload
    """
    scheme = ChannelScheme(scheme or settings.CHANNEL_SCHEME)
    sound = android_sound_name(sound_key)

    # Ensure all data values are strings (FCM requirement)
    if data:
        data = {k: str(v) if v is not None else "" for k, v in data.items()}
    else:
        data = {}

    target = {}
    if to.startswith("/topics/"):
        target["topic"] = to.replace("/topics/", "", 1)
    else:
        target["token"] = to

    return messaging.Message(
        notification=messaging.Notification(title=title, body=body),
        data=data,
        android=messaging.AndroidConfig(
            priority="high",
            notification=messaging.AndroidNotification(
                sound=sound,
                channel_id=channel_id_for(sound_key, scheme),
            ),
        ),
        apns=messaging.APNSConfig(
            payload=messaging.APNSPayload(aps=messaging.Aps(sound=sound, badge=1)),
        ),
        **target,
    )


def send_ride_alert(to: str, title: str, body: str, sound_key=SoundKey.DEFAULT, scheme=None, data=None):
    """Send a new-ride push. Never raises; failures come back as {"error": ...}."""
    if not init_firebase():
        logger.warning("Firebase Admin SDK not initialized; skipping push send")
        return {"error": "Firebase Admin SDK not initialized"}

    try:
        message = build_ride_message(to, title, body, sound_key, scheme, data)
        logger.info(f"📤 Sending ride alert to {to}: {title} (channel {message.android.notification.channel_id})")
        response = messaging.send(message)
        logger.info(f"FCM notification sent successfully: {response}")
        return {"success": True, "message_id": response}

    except Exception as exc:
        logger.error(f"Failed sending FCM message to {to}: {exc}", exc_info=True)
        return {"error": "failed_to_send", "details": str(exc)}
