"""Utility helpers shared across the engine."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable, List


_WS_RE = re.compile(r"\s+")


def utc_now() -> datetime:
    """Default clock for timestamps stamped by extractors and the assembler."""
    return datetime.now(timezone.utc)


def isoformat_z(moment: datetime) -> str:
    """Render a timestamp as ISO-8601 with a trailing 'Z' for UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def squash_ws(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _WS_RE.sub(" ", text or "").strip()


def uniq_preserve_order(items: Iterable[str]) -> List[str]:
    """Deduplicate on exact string equality while preserving first-seen order."""
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        if it in seen:
            continue
        seen.add(it)
        out.append(it)
    return out
