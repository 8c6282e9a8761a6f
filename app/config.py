import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # If DB_URL is not provided, fall back to a local sqlite file for ease of local
    # development (no Postgres instance needed to inspect the channel registry).
    DB_URL: str = os.getenv("DB_URL") or "sqlite:///./dev.db"

    PROJECT_NAME: str = os.getenv("PROJECT_NAME") or "Ride Notification Channels API"

    # Android application id, used to build android.resource:// sound URIs.
    ANDROID_PACKAGE_NAME: str = os.getenv("ANDROID_PACKAGE_NAME") or "com.vtcdispatch.app"

    # Mirror of the app's res/raw folder. A sound key is "bundled" when a file
    # with the same stem lives here.
    RAW_SOUNDS_DIR: str = os.getenv("RAW_SOUNDS_DIR") or "./res/raw"

    # API level reported by the host. Channels exist from API 26 (Android O).
    PLATFORM_SDK_INT: int = int(os.getenv("PLATFORM_SDK_INT") or 34)

    # "single" registers rides_channel only, "per_sound" one channel per sound key.
    # Push senders in production target rides_channel, so single is the default.
    CHANNEL_SCHEME: str = os.getenv("CHANNEL_SCHEME") or "single"

    # Firebase service account JSON path. If missing, push sending is skipped
    # gracefully (no hardcoded secrets).
    FIREBASE_CREDENTIALS: Optional[str] = os.getenv("FIREBASE_CREDENTIALS") or None

    # Key required for POST /channels/provision.
    API_KEY: Optional[str] = os.getenv("API_KEY") or None

    LOG_LEVEL: str = os.getenv("LOG_LEVEL") or "INFO"


settings = Settings()
