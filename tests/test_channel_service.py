"""
test_channel_service.py — Tests for ride notification channel provisioning.

Covers:
    • Sound resolution (default key, bundled resource, fallback)
    • Channel id / name construction for both schemes
    • Per-sound and single-channel provisioning
    • API level and notification-manager guards
    • Idempotence and the startup entry point

Run with:
    pytest tests/test_channel_service.py -v
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.schemas.channel import (
    AudioContentType,
    AudioUsage,
    ChannelScheme,
    ChannelSpec,
    Importance,
    SoundKey,
    SoundReference,
)
from app.services.channel_service import (
    CHANNEL_DESCRIPTION,
    VIBRATION_PATTERN,
    build_channel_spec,
    channel_id_for,
    channel_name_for,
    initialize_notification_channels,
    provision,
    provision_channels,
    provision_default_channel,
    resolve_sound,
    skip_reason,
)
from app.utils.sound_utils import DEFAULT_NOTIFICATION_URI

from conftest import FakeHost, FakeNotificationManager


BUNDLED_ALERT1 = "android.resource://com.vtcdispatch.app/raw/alert1"


# ═══════════════════════════════════════════════════════════════════════════
# Naming
# ═══════════════════════════════════════════════════════════════════════════

class TestNaming:

    def test_per_sound_ids_are_suffixed_including_default(self):
        assert channel_id_for(SoundKey.DEFAULT) == "rides_channel_default"
        assert channel_id_for(SoundKey.ALERT1) == "rides_channel_alert1"
        assert channel_id_for(SoundKey.CHIME) == "rides_channel_chime"

    def test_single_scheme_id_is_unsuffixed(self):
        assert channel_id_for(SoundKey.DEFAULT, ChannelScheme.SINGLE) == "rides_channel"

    def test_default_name_has_no_suffix(self):
        assert channel_name_for(SoundKey.DEFAULT) == "Nouvelles courses"

    def test_alternate_names_are_suffixed(self):
        assert channel_name_for(SoundKey.ALERT2) == "Nouvelles courses - alert2"

    def test_plain_string_keys_accepted(self):
        assert channel_id_for("chime") == "rides_channel_chime"

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError):
            channel_id_for("siren")


# ═══════════════════════════════════════════════════════════════════════════
# Sound resolution
# ═══════════════════════════════════════════════════════════════════════════

class TestResolveSound:

    def test_default_key_never_probes(self, host):
        sound = resolve_sound(SoundKey.DEFAULT, host)
        assert sound.uri == DEFAULT_NOTIFICATION_URI
        assert sound.is_default
        assert host.probes == []

    def test_bundled_resource_used(self, host):
        sound = resolve_sound(SoundKey.ALERT1, host)
        assert sound.uri == BUNDLED_ALERT1
        assert not sound.is_default
        assert host.probes == ["alert1"]

    def test_missing_resource_falls_back_to_default(self, host):
        sound = resolve_sound(SoundKey.CHIME, host)
        assert sound == host.resolve_default_notification_sound()


# ═══════════════════════════════════════════════════════════════════════════
# ChannelSpec
# ═══════════════════════════════════════════════════════════════════════════

class TestChannelSpec:

    def test_fixed_settings(self, host):
        spec = build_channel_spec(SoundKey.ALERT2, host.resolve_default_notification_sound())
        assert spec.description == CHANNEL_DESCRIPTION
        assert spec.vibration_pattern == (0, 200, 100, 200)
        assert spec.importance == Importance.HIGH
        assert spec.lights_enabled and spec.vibration_enabled
        assert spec.audio_attributes.usage == AudioUsage.NOTIFICATION
        assert spec.audio_attributes.content_type == AudioContentType.SONIFICATION

    def test_empty_description_rejected(self):
        with pytest.raises(ValidationError):
            ChannelSpec(
                channel_id="rides_channel",
                name="Nouvelles courses",
                description="",
                vibration_pattern=VIBRATION_PATTERN,
                sound=SoundReference(uri=DEFAULT_NOTIFICATION_URI, is_default=True),
            )

    def test_empty_vibration_pattern_rejected(self):
        with pytest.raises(ValidationError):
            ChannelSpec(
                channel_id="rides_channel",
                name="Nouvelles courses",
                description=CHANNEL_DESCRIPTION,
                vibration_pattern=(),
                sound=SoundReference(uri=DEFAULT_NOTIFICATION_URI, is_default=True),
            )

    def test_sound_is_required(self):
        with pytest.raises(ValidationError):
            ChannelSpec(
                channel_id="rides_channel",
                name="Nouvelles courses",
                description=CHANNEL_DESCRIPTION,
                vibration_pattern=VIBRATION_PATTERN,
            )

    def test_empty_sound_uri_rejected(self):
        with pytest.raises(ValidationError):
            SoundReference(uri="")


# ═══════════════════════════════════════════════════════════════════════════
# Per-sound provisioning
# ═══════════════════════════════════════════════════════════════════════════

class TestProvisionChannels:

    def test_one_channel_per_key_in_order(self, host, manager):
        specs = provision_channels(host)
        assert [s.channel_id for s in specs] == [
            "rides_channel_default",
            "rides_channel_alert1",
            "rides_channel_alert2",
            "rides_channel_chime",
        ]
        assert [s.channel_id for s in manager.calls] == [s.channel_id for s in specs]

    def test_ids_unique_within_batch(self, host):
        ids = [s.channel_id for s in provision_channels(host)]
        assert len(ids) == len(set(ids)) == len(SoundKey)

    def test_only_alert1_bundled_scenario(self, host, manager):
        provision_channels(host)
        assert len(manager.channels) == 4
        assert manager.channels["rides_channel_alert1"].sound.uri == BUNDLED_ALERT1
        for cid in ("rides_channel_default", "rides_channel_alert2", "rides_channel_chime"):
            assert manager.channels[cid].sound.uri == DEFAULT_NOTIFICATION_URI

    def test_every_channel_has_a_sound(self, manager):
        host = FakeHost(manager=manager)
        for spec in provision_channels(host):
            assert spec.sound.uri
            assert spec.description
            assert spec.vibration_pattern

    def test_idempotent(self, host, manager):
        first = provision_channels(host)
        snapshot = dict(manager.channels)
        second = provision_channels(host)
        assert first == second
        assert manager.channels == snapshot
        assert len(manager.channels) == 4

    def test_api_level_guard(self, manager):
        host = FakeHost(sdk_int=25, manager=manager, bundled={"alert1"})
        assert provision_channels(host) == []
        assert manager.calls == []
        assert host.probes == []

    def test_api_level_26_provisions(self, manager):
        host = FakeHost(sdk_int=26, manager=manager)
        assert len(provision_channels(host)) == 4

    def test_missing_manager_guard(self):
        host = FakeHost(manager=None, bundled={"alert1"})
        assert provision_channels(host) == []

    def test_failed_key_does_not_stop_the_others(self):
        class FlakyManager(FakeNotificationManager):
            def create_notification_channel(self, spec):
                if spec.channel_id == "rides_channel_alert2":
                    raise RuntimeError("binder died")
                super().create_notification_channel(spec)

        manager = FlakyManager()
        specs = provision_channels(FakeHost(manager=manager))
        expected = ["rides_channel_default", "rides_channel_alert1", "rides_channel_chime"]
        assert [s.channel_id for s in specs] == expected
        assert list(manager.channels) == expected

    def test_unusable_bundled_sound_skips_only_that_key(self, manager):
        class BadProbeHost(FakeHost):
            def probe_bundled_resource(self, name):
                if name == "alert1":
                    return SoundReference(uri="")
                return None

        specs = provision_channels(BadProbeHost(manager=manager))
        assert [s.channel_id for s in specs] == [
            "rides_channel_default",
            "rides_channel_alert2",
            "rides_channel_chime",
        ]
        assert all(s.sound.uri for s in manager.channels.values())

    def test_startup_reports_partial_registration(self):
        class FlakyManager(FakeNotificationManager):
            def create_notification_channel(self, spec):
                if spec.channel_id == "rides_channel_chime":
                    raise RuntimeError("binder died")
                super().create_notification_channel(spec)

        specs = initialize_notification_channels(FakeHost(manager=FlakyManager()), "per_sound")
        assert len(specs) == 3


# ═══════════════════════════════════════════════════════════════════════════
# Single-channel provisioning
# ═══════════════════════════════════════════════════════════════════════════

class TestProvisionDefaultChannel:

    def test_single_rides_channel(self, host, manager):
        specs = provision_default_channel(host)
        assert len(specs) == 1
        spec = specs[0]
        assert spec.channel_id == "rides_channel"
        assert spec.name == "Nouvelles courses"
        assert spec.sound.uri == DEFAULT_NOTIFICATION_URI
        assert list(spec.vibration_pattern) == [0, 200, 100, 200]
        assert list(manager.channels) == ["rides_channel"]

    def test_no_probing(self, host):
        provision_default_channel(host)
        assert host.probes == []

    def test_guards(self, manager):
        assert provision_default_channel(FakeHost(sdk_int=21, manager=manager)) == []
        assert provision_default_channel(FakeHost(manager=None)) == []
        assert manager.calls == []


# ═══════════════════════════════════════════════════════════════════════════
# Dispatch and startup entry point
# ═══════════════════════════════════════════════════════════════════════════

class TestInitialize:

    def test_dispatch_on_scheme(self, host):
        assert len(provision(host, ChannelScheme.PER_SOUND)) == 4
        assert [s.channel_id for s in provision(host, ChannelScheme.SINGLE)] == ["rides_channel"]

    def test_scheme_given_as_string(self, host, manager):
        initialize_notification_channels(host, "single")
        assert list(manager.channels) == ["rides_channel"]

    def test_never_raises_on_registration_failure(self):
        class BrokenManager(FakeNotificationManager):
            def create_notification_channel(self, spec):
                raise RuntimeError("binder died")

        host = FakeHost(manager=BrokenManager())
        assert initialize_notification_channels(host, ChannelScheme.PER_SOUND) == []

    def test_never_raises_on_bad_scheme(self, host, manager):
        assert initialize_notification_channels(host, "ringtones") == []
        assert manager.calls == []

    def test_skip_reason(self, manager):
        assert skip_reason(FakeHost(manager=manager)) is None
        assert "25" in skip_reason(FakeHost(sdk_int=25, manager=manager))
        assert skip_reason(FakeHost(manager=None)) == "notification manager unavailable"
