"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

import typer
from pydantic import BaseModel, ValidationError

from schemas.case import CaseBundle, CaseRecord, DraftRecord

ModelT = TypeVar("ModelT", bound=BaseModel)


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def load_model(path: Path, model: type[ModelT]) -> ModelT:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in {path}: {exc}") from exc
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(f"{path}: {exc}") from exc


def load_draft(path: Path) -> DraftRecord:
    return load_model(path, DraftRecord)


def load_case(path: Path | None) -> CaseBundle:
    """Case metadata for caption/readiness; an absent file means an empty case."""
    if path is None:
        return CaseBundle(case=CaseRecord(id="local"))
    return load_model(path, CaseBundle)


def read_optional_bytes(path: Path | None) -> bytes | None:
    if path is None:
        return None
    return path.read_bytes()


def write_output(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    typer.echo(f"Wrote {path} ({len(content)} bytes)")


__all__ = [
    "emit_json",
    "load_case",
    "load_draft",
    "load_model",
    "read_optional_bytes",
    "write_output",
]
