from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..models.notification_channel import NotificationChannel
from ..schemas.channel import ChannelOut, ChannelScheme, ProvisionResult
from ..dependencies import get_db
from ..config import settings
from ..services.host import build_host_from_settings
from ..services.channel_service import provision, skip_reason
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[ChannelOut])
def list_channels(db: Session = Depends(get_db)):
    """Channels registered so far, in registration order"""
    return db.query(NotificationChannel).order_by(NotificationChannel.id).all()


@router.get("/{channel_id}", response_model=ChannelOut)
def get_channel(channel_id: str, db: Session = Depends(get_db)):
    channel = db.query(NotificationChannel).filter(NotificationChannel.channel_id == channel_id).first()
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    return channel


@router.post("/provision", response_model=ProvisionResult)
def provision_now(scheme: str | None = None):
    """
    Re-run channel provisioning against the configured host.

    Args:
        scheme: "single" or "per_sound" (defaults to CHANNEL_SCHEME)
    """
    try:
        scheme = ChannelScheme(scheme or settings.CHANNEL_SCHEME)
    except ValueError:
        allowed = ", ".join(s.value for s in ChannelScheme)
        raise HTTPException(status_code=400, detail=f"Invalid scheme. Allowed: {allowed}")

    host = build_host_from_settings()
    reason = skip_reason(host)
    specs = provision(host, scheme)
    logger.info(f"Manual provisioning ({scheme.value}): {len(specs)} channels")

    return ProvisionResult(
        scheme=scheme,
        channel_ids=[s.channel_id for s in specs],
        skipped=reason,
    )
