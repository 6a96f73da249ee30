"""Stable hashing helpers for content-addressed identifiers."""

from __future__ import annotations

import hashlib
import json


def sha256_bytes(data: bytes) -> str:
    """Return hex sha256 of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def stable_json_dumps(payload: object) -> str:
    """Dump JSON with stable ordering for hashing."""
    return json.dumps(
        payload,
        ensure_ascii=True,
        sort_keys=True,
        separators=(",", ":"),
        default=_json_default,
    )


def hash_payload(payload: object) -> str:
    """Return sha256 hash of a JSON-serializable payload."""
    return sha256_bytes(stable_json_dumps(payload).encode("utf-8"))


def content_issue_id(kind: str, content: object, *, length: int = 12) -> str:
    """Issue id for a defect parameterized by extracted text.

    The id is ``<kind>:<digest>`` where the digest covers the canonical
    ``(kind, content)`` pair, so the same literal offending text always maps
    to the same id.
    """
    digest = hash_payload({"kind": kind, "content": content})
    return f"{kind}:{digest[:length]}"


def _json_default(value: object) -> str:
    return str(value)


__all__ = [
    "content_issue_id",
    "hash_payload",
    "sha256_bytes",
    "stable_json_dumps",
]
