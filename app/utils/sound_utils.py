"""
Utility functions for sound handling
"""
import os

# RingtoneManager.getDefaultUri(TYPE_NOTIFICATION)
DEFAULT_NOTIFICATION_URI = "content://settings/system/notification_sound"

# Extensions accepted in res/raw for alert sounds
AUDIO_EXTENSIONS = {'.mp3', '.wav', '.ogg', '.m4a', '.aac'}


def normalize_sound_name(sound_name: str | None) -> str:
    """
    Normalize sound name by removing file extension.
    Android res/raw files are referenced without extension.

    Args:
        sound_name: Sound filename (may include extension)

    Returns:
        Sound name without extension

    Examples:
        "alert1.wav" -> "alert1"
        "chime.mp3" -> "chime"
        "default" -> "default"
    """
    if not sound_name:
        return "default"

    name_without_ext = os.path.splitext(sound_name)[0]

    return name_without_ext if name_without_ext else "default"


def raw_resource_uri(package_name: str, sound_name: str) -> str:
    """URI the platform uses to play res/raw/<sound_name> of package_name."""
    return f"android.resource://{package_name}/raw/{normalize_sound_name(sound_name)}"
