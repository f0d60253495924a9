"""Schedule types.

Public types:
- Notification: A channel/text pair serialized for delivery
- SendOutcome: Result of a delivered HTTP exchange
- DeliveryError: Transport-level failure raised by sinks
- NotificationSink: Async delivery capability consumed by runners
"""

import json
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class Notification:
    """A message destined for a single channel."""

    channel: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the two-field payload expected by the messaging API."""
        return {"channel": self.channel, "text": self.text}

    def to_json(self) -> str:
        """Serialize to compact JSON text, keeping non-ASCII characters as-is."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class SendOutcome:
    """Response from the messaging API for one send attempt."""

    status_code: int
    ok: bool
    error: str | None = None
    body: str = ""

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "SendOutcome":
        """Build an outcome from a raw status and response body.

        A 2xx status is accepted unless the JSON body carries ``"ok": false``,
        which is how Slack reports application-level rejections.
        """
        ok = 200 <= status_code < 300
        error: str | None = None

        try:
            data = json.loads(body) if body else None
        except json.JSONDecodeError:
            data = None

        if isinstance(data, dict):
            if data.get("ok") is False:
                ok = False
            if data.get("error"):
                error = str(data["error"])

        if not ok and error is None:
            error = f"HTTP {status_code}"

        return cls(status_code=status_code, ok=ok, error=error, body=body)


class DeliveryError(Exception):
    """Transport-level delivery failure (connection, TLS, timeout)."""

    pass


class NotificationSink(Protocol):
    """Anything that can deliver a notification.

    The notification bundles the destination channel and the message text.
    """

    async def send(self, notification: Notification) -> SendOutcome: ...
