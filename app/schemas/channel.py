"""
Channel and sound types shared by the provisioner, the registry and the API.
"""
from datetime import datetime
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SoundKey(str, Enum):
    """Alert sounds offered to drivers. Order is the registration order."""
    DEFAULT = "default"
    ALERT1 = "alert1"
    ALERT2 = "alert2"
    CHIME = "chime"


class ChannelScheme(str, Enum):
    SINGLE = "single"        # one "rides_channel"
    PER_SOUND = "per_sound"  # "rides_channel_<key>" for every SoundKey


class Importance(IntEnum):
    # Values match android.app.NotificationManager.IMPORTANCE_*
    MIN = 1
    LOW = 2
    DEFAULT = 3
    HIGH = 4


class AudioUsage(IntEnum):
    NOTIFICATION = 5  # AudioAttributes.USAGE_NOTIFICATION


class AudioContentType(IntEnum):
    SONIFICATION = 4  # AudioAttributes.CONTENT_TYPE_SONIFICATION


class AudioAttributes(BaseModel):
    model_config = ConfigDict(frozen=True)

    usage: AudioUsage = AudioUsage.NOTIFICATION
    content_type: AudioContentType = AudioContentType.SONIFICATION


class SoundReference(BaseModel):
    """Resolved pointer to a playable alert sound."""
    model_config = ConfigDict(frozen=True)

    uri: str = Field(min_length=1)
    is_default: bool = False


class ChannelSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    importance: Importance = Importance.HIGH
    vibration_pattern: tuple[int, ...]
    lights_enabled: bool = True
    vibration_enabled: bool = True
    sound: SoundReference
    audio_attributes: AudioAttributes = AudioAttributes()

    @field_validator("vibration_pattern")
    @classmethod
    def _non_empty_pattern(cls, value):
        if not value:
            raise ValueError("vibration pattern must not be empty")
        if any(step < 0 for step in value):
            raise ValueError("vibration durations must be >= 0 ms")
        return value


class ChannelOut(BaseModel):
    channel_id: str
    name: str
    description: str
    importance: int
    vibration_pattern: list[int]
    lights_enabled: bool
    vibration_enabled: bool
    sound_uri: str
    audio_usage: int
    audio_content_type: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SoundOut(BaseModel):
    name: str
    display_name: str
    bundled: bool
    uri: str


class ProvisionResult(BaseModel):
    scheme: ChannelScheme
    channel_ids: list[str]
    skipped: str | None = None  # reason when provisioning was a no-op
