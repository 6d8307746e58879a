from typing import Any, Dict, List, Optional

from utils.sm2 import now_ms

MAX_LOG_ENTRIES = 1000


def log_event(log: List[Dict[str, Any]], event_type: str, now: Optional[int] = None, **payload: Any) -> None:
    """Append an event and drop the oldest entries beyond MAX_LOG_ENTRIES."""
    log.append({"ts": now if now is not None else now_ms(), "type": event_type, **payload})
    overflow = len(log) - MAX_LOG_ENTRIES
    if overflow > 0:
        del log[:overflow]
