"""Wire types exchanged between the client and the backend."""

from __future__ import annotations

import base64
import json
import re
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence, TypeVar

T = TypeVar("T")

DATE_ONLY = "%Y-%m-%d"
"""strftime format for a calendar date with no time component."""

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
"""The zero timestamp used when a time field is absent."""

_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$",
    re.ASCII,
)


def format_time(value: datetime) -> str:
    """Render a timestamp as RFC 3339 with trailing fractional zeros removed."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, accepting up to nanosecond precision."""
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "").ljust(6, "0")[:6])
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        hours, mins = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=mins))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _time_or_zero(value: Any) -> datetime:
    return parse_time(value) if value else ZERO_TIME


def _encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _decode_bytes(value: Any) -> bytes:
    return base64.b64decode(value) if value else b""


@dataclass
class EncHistoryEntry:
    """An encrypted history entry as stored by the backend.

    ``device_id`` is the device that will read the entry, not the one that
    recorded it. ``date`` equals the entry's end time.
    """

    encrypted_data: bytes = b""
    nonce: bytes = b""
    device_id: str = ""
    user_id: str = ""
    date: datetime = ZERO_TIME
    encrypted_id: str = ""
    read_count: int = 0
    is_from_same_device: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "enc_data": _encode_bytes(self.encrypted_data),
            "nonce": _encode_bytes(self.nonce),
            "device_id": self.device_id,
            "user_id": self.user_id,
            "time": format_time(self.date),
            "encrypted_id": self.encrypted_id,
            "read_count": self.read_count,
            "is_from_same_device": self.is_from_same_device,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EncHistoryEntry:
        return cls(
            encrypted_data=_decode_bytes(data.get("enc_data")),
            nonce=_decode_bytes(data.get("nonce")),
            device_id=data.get("device_id") or "",
            user_id=data.get("user_id") or "",
            date=_time_or_zero(data.get("time")),
            encrypted_id=data.get("encrypted_id") or "",
            read_count=data.get("read_count") or 0,
            is_from_same_device=bool(data.get("is_from_same_device")),
        )


@dataclass
class DumpRequest:
    """A request for all history entries, used to bootstrap a new device."""

    user_id: str = ""
    requesting_device_id: str = ""
    request_time: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "requesting_device_id": self.requesting_device_id,
            "request_time": format_time(self.request_time),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DumpRequest:
        return cls(
            user_id=data.get("user_id") or "",
            requesting_device_id=data.get("requesting_device_id") or "",
            request_time=_time_or_zero(data.get("request_time")),
        )


def _json_name(key: str) -> Any:
    return field(default="", metadata={"json": key})


@dataclass
class UpdateInfo:
    """Where release binaries and their attestations can be downloaded from."""

    linux_amd64_url: str = _json_name("linux_amd_64_url")
    linux_amd64_attestation_url: str = _json_name("linux_amd_64_attestation_url")
    linux_arm64_url: str = _json_name("linux_arm_64_url")
    linux_arm64_attestation_url: str = _json_name("linux_arm_64_attestation_url")
    linux_arm7_url: str = _json_name("linux_arm_7_url")
    linux_arm7_attestation_url: str = _json_name("linux_arm_7_attestation_url")
    darwin_amd64_url: str = _json_name("darwin_amd_64_url")
    darwin_amd64_unsigned_url: str = _json_name("darwin_amd_64_unsigned_url")
    darwin_amd64_attestation_url: str = _json_name("darwin_amd_64_attestation_url")
    darwin_arm64_url: str = _json_name("darwin_arm_64_url")
    darwin_arm64_unsigned_url: str = _json_name("darwin_arm_64_unsigned_url")
    darwin_arm64_attestation_url: str = _json_name("darwin_arm_64_attestation_url")
    version: str = _json_name("version")

    def to_dict(self) -> dict[str, Any]:
        return {f.metadata["json"]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UpdateInfo:
        return cls(**{f.name: data.get(f.metadata["json"]) or "" for f in fields(cls)})


@dataclass
class MessageIdentifier:
    """Identifies one history entry without including the command itself."""

    device_id: str = ""
    end_time: datetime = ZERO_TIME
    entry_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "device_id": self.device_id,
            "date": format_time(self.end_time),
            "entry_id": self.entry_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageIdentifier:
        return cls(
            device_id=data.get("device_id") or "",
            end_time=_time_or_zero(data.get("date")),
            entry_id=data.get("entry_id") or "",
        )


@dataclass
class MessageIdentifiers:
    """A list of history entries that should be deleted."""

    ids: list[MessageIdentifier] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"message_ids": [ident.to_dict() for ident in self.ids]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageIdentifiers:
        return cls(ids=[MessageIdentifier.from_dict(d) for d in data.get("message_ids") or []])

    def to_json_bytes(self) -> bytes:
        """Serialise to JSON bytes, as stored in a database column."""
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_json_bytes(cls, value: Any) -> MessageIdentifiers:
        """Load from JSON bytes read out of a database column."""
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"failed to unmarshal JSONB value: {value!r}")
        decoded = json.loads(bytes(value))
        if decoded is None:
            return cls()
        if not isinstance(decoded, dict):
            raise ValueError(f"expected a JSON object, got {decoded!r}")
        return cls.from_dict(decoded)


@dataclass
class DeletionRequest:
    """A request, queued per destination device, to delete history entries."""

    user_id: str = ""
    destination_device_id: str = ""
    send_time: datetime = ZERO_TIME
    messages: MessageIdentifiers = field(default_factory=MessageIdentifiers)
    read_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "destination_device_id": self.destination_device_id,
            "send_time": format_time(self.send_time),
            "messages": self.messages.to_dict(),
            "read_count": self.read_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeletionRequest:
        return cls(
            user_id=data.get("user_id") or "",
            destination_device_id=data.get("destination_device_id") or "",
            send_time=_time_or_zero(data.get("send_time")),
            messages=MessageIdentifiers.from_dict(data.get("messages") or {}),
            read_count=data.get("read_count") or 0,
        )


@dataclass
class Feedback:
    """User feedback submitted on uninstall."""

    user_id: str = ""
    date: datetime = ZERO_TIME
    feedback: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "date": format_time(self.date),
            "feedback": self.feedback,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Feedback:
        return cls(
            user_id=data.get("user_id") or "",
            date=_time_or_zero(data.get("date")),
            feedback=data.get("feedback") or "",
        )


@dataclass
class SubmitResponse:
    """Reply to a submission, carrying pending dump and deletion requests."""

    dump_requests: list[DumpRequest] = field(default_factory=list)
    deletion_requests: list[DeletionRequest] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dump_requests": [r.to_dict() for r in self.dump_requests],
            "deletion_requests": [r.to_dict() for r in self.deletion_requests],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubmitResponse:
        return cls(
            dump_requests=[DumpRequest.from_dict(d) for d in data.get("dump_requests") or []],
            deletion_requests=[
                DeletionRequest.from_dict(d) for d in data.get("deletion_requests") or []
            ],
        )


def chunks(items: Sequence[T], chunk_size: int) -> list[list[T]]:
    """Split ``items`` into consecutive lists of at most ``chunk_size`` elements."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [list(items[start : start + chunk_size]) for start in range(0, len(items), chunk_size)]