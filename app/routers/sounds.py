from fastapi import APIRouter

from ..schemas.channel import SoundKey, SoundOut
from ..services.host import build_host_from_settings
from ..services.channel_service import channel_name_for, resolve_sound

router = APIRouter()


@router.get("/list", response_model=list[SoundOut])
async def list_sounds():
    """
    Get every alert sound a driver can pick, with the sound it resolves to.

    A key is "bundled" when res/raw ships a file with the same name; otherwise
    its channel plays the platform default notification sound.
    """
    host = build_host_from_settings()

    sounds = []
    for key in SoundKey:
        sound = resolve_sound(key, host)
        sounds.append(SoundOut(
            name=key.value,
            display_name=channel_name_for(key),
            bundled=not sound.is_default,
            uri=sound.uri,
        ))
    return sounds
