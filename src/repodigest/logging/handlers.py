"""Log formatters for repodigest.

Digest modules attach scan details to records through ``extra``:

    logger.debug(
        "Skipped %s", path,
        extra={"relative_path": path, "skip_reason": "too_large"},
    )

JSONFormatter lifts those digest fields to the top level of each entry so
log consumers can filter on them directly.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Record attributes set by digest modules, emitted as top-level keys
DIGEST_FIELDS: tuple[str, ...] = (
    "root",
    "relative_path",
    "skip_reason",
    "file_count",
    "elapsed_seconds",
)

# Attributes every LogRecord carries; never treated as context
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: timestamp (ISO-8601 UTC), level, message, logger (omitted for
    the root logger), any DIGEST_FIELDS present on the record, context
    (remaining ``extra`` values) and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        context: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            if key in DIGEST_FIELDS:
                entry[key] = value
            else:
                context[key] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
