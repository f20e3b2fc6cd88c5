import json
import logging
import random
from datetime import datetime, timezone

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "created",
        "msecs",
        "relativeCreated",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "exc_info",
        "exc_text",
        "stack_info",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter for production logs.

    - Base fields are time, level, logger name and message.
    - Attributes passed via `extra` (event, order_id, cart_id...) are merged in.
    - Dict messages are merged into the payload under their own keys.
    - Exceptions are rendered under `exc`.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
        }

        msg = record.msg if isinstance(record.msg, dict) else record.getMessage()
        payload = {**base, **msg} if isinstance(msg, dict) else {**base, "message": msg}

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            try:
                json.dumps(value)
                payload.setdefault(key, value)
            except TypeError:
                payload.setdefault(key, str(value))

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


class SamplingFilter(logging.Filter):
    """Probabilistically drop logs to reduce noise while keeping signal.

    - `rate`: fraction in [0.0, 1.0] of matching records to keep.
    - `levels`: level names sampling applies to (default INFO only).
    - `allow_events`: event names never sampled, matched against the record's
      message or its `event` extra.
    """

    def __init__(self, rate: float = 1.0, levels: list[str] | None = None, allow_events: list[str] | None = None):
        super().__init__()
        self.rate = min(max(float(rate), 0.0), 1.0)
        self.levels = set(levels or ["INFO"])
        self.allow_events = set(allow_events or [])

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if record.levelname not in self.levels:
            return True
        event = record.msg if isinstance(record.msg, str) else getattr(record, "event", None)
        if event in self.allow_events or getattr(record, "event", None) in self.allow_events:
            return True
        if self.rate >= 1.0:
            return True
        if self.rate <= 0.0:
            return False
        return random.random() < self.rate
