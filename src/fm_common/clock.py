"""Slot clock - the monotonically increasing height the core treats as opaque input.

Slots are derived from wall time: (now_ms - genesis_ms) // slot_duration_ms.
Services take a SlotClockProtocol so tests can pin the height.
"""

from datetime import datetime, timezone
from typing import Protocol

from config.settings import settings


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


class SlotClockProtocol(Protocol):
    def current_slot(self) -> int: ...


class SlotClock:
    def __init__(
        self,
        slot_duration_ms: int | None = None,
        genesis_timestamp_ms: int | None = None,
    ) -> None:
        self._slot_ms = (
            settings.SLOT_DURATION_MS if slot_duration_ms is None else slot_duration_ms
        )
        self._genesis_ms = (
            settings.GENESIS_TIMESTAMP_MS if genesis_timestamp_ms is None else genesis_timestamp_ms
        )
        if self._slot_ms <= 0:
            raise ValueError(f"slot_duration_ms must be positive, got {self._slot_ms}")

    def current_slot(self) -> int:
        now_ms = int(utc_now().timestamp() * 1000)
        return max(0, (now_ms - self._genesis_ms) // self._slot_ms)


class FixedSlotClock:
    """Clock pinned to an explicit slot; advanced manually."""

    def __init__(self, slot: int = 0) -> None:
        self.slot = slot

    def current_slot(self) -> int:
        return self.slot

    def advance(self, slots: int) -> None:
        self.slot += slots
