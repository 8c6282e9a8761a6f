"""
Notification Channel Management Script
Inspect the channel registry and re-run provisioning by hand
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.config import settings
from app.schemas.channel import ChannelScheme
from app.services.host import DatabaseNotificationManager, build_host_from_settings
from app.services.channel_service import provision, skip_reason

def list_channels():
    """List all registered channels"""
    channels = DatabaseNotificationManager().list_channels()

    print("\n" + "="*60)
    print("  REGISTERED NOTIFICATION CHANNELS")
    print("="*60)

    if not channels:
        print("No channels registered.")
    else:
        for channel in channels:
            print(f"\nChannel: {channel.channel_id}")
            print(f"Name:    {channel.name}")
            print(f"Sound:   {channel.sound_uri}")
            print(f"Vibrate: {channel.vibration_pattern}")

    print("\n" + "="*60)
    print()

def provision_channels(scheme: str):
    """Provision channels with the given scheme"""
    host = build_host_from_settings()

    reason = skip_reason(host)
    if reason:
        print(f"⚠️  Provisioning skipped: {reason}")
        return []

    specs = provision(host, ChannelScheme(scheme))
    for spec in specs:
        print(f"✅ {spec.channel_id} -> {spec.sound.uri}")
    print(f"\n📊 {len(specs)} channel(s) provisioned ({scheme})")
    return specs

def main():
    """Main function"""
    if len(sys.argv) < 2:
        print("\n📋 Notification Channel Management")
        print("\nUsage:")
        print("  python manage_channels.py list                          - List registered channels")
        print("  python manage_channels.py provision [single|per_sound]  - Provision channels")
        print("\nExamples:")
        print("  python manage_channels.py list")
        print("  python manage_channels.py provision per_sound")
        print()
        return

    command = sys.argv[1].lower()

    if command == "list":
        list_channels()

    elif command == "provision":
        scheme = sys.argv[2] if len(sys.argv) > 2 else settings.CHANNEL_SCHEME
        if scheme not in {s.value for s in ChannelScheme}:
            print(f"❌ Unknown scheme: {scheme}")
            print("Use 'single' or 'per_sound'")
            return
        provision_channels(scheme)

    else:
        print(f"❌ Unknown command: {command}")
        print("Use 'list' or 'provision'")

if __name__ == "__main__":
    main()
