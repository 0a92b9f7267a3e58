"""Per-request correlation context."""

import logging
import uuid
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("vault_relay.request")


class RequestLogger(logging.LoggerAdapter):
    """Logger adapter that tags every record with the request id."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        request_id = self.extra["request_id"] if self.extra else "-"
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("request_id", request_id)
        kwargs["extra"] = extra
        return f"[{request_id}] {msg}", kwargs


def _new_request_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class RequestContext:
    """Short-lived correlation data for one webhook request.

    Attributes:
        request_id: Opaque token linking all log lines of one request.
    """

    request_id: str = field(default_factory=_new_request_id)

    @property
    def log(self) -> RequestLogger:
        return RequestLogger(logger, {"request_id": self.request_id})
