# resume_qa/index_store.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator

from resume_qa.errors import IndexMissingOrEmpty

Domain = Literal["resume", "personal"]
REBUILD_HINT = "Run: python -m resume_qa.ingest"


class ChunkRecord(BaseModel):
    id: int
    text: str
    source: str
    domain: Domain = "resume"
    embedding: list[float]

    @field_validator("domain", mode="before")
    @classmethod
    def _default_domain(cls, v):
        # legacy indexes wrote no domain (or null): everything was resume content
        return v or "resume"


class IndexStore:
    """
    One JSON array of ChunkRecord objects on disk.
    Reads the primary file, or the legacy file when the primary is absent.
    Only the primary file is ever written.
    """

    def __init__(self, path: Path, legacy_path: Path | None = None):
        self.path = Path(path)
        self.legacy_path = Path(legacy_path) if legacy_path is not None else None

    def resolve_path(self) -> Path:
        if self.path.exists():
            return self.path
        if self.legacy_path is not None and self.legacy_path.exists():
            return self.legacy_path
        raise IndexMissingOrEmpty(f"Index not found at {self.path}. {REBUILD_HINT}")

    def load(self) -> list[ChunkRecord]:
        path = self.resolve_path()
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise IndexMissingOrEmpty(f"Index at {path} is not valid JSON ({exc}). {REBUILD_HINT}") from exc

        if not isinstance(payload, list) or len(payload) == 0:
            raise IndexMissingOrEmpty(f"Index is empty. {REBUILD_HINT}")

        try:
            records = [ChunkRecord.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise IndexMissingOrEmpty(f"Index at {path} has malformed records. {REBUILD_HINT}") from exc

        dims = {len(r.embedding) for r in records}
        if len(dims) != 1:
            raise IndexMissingOrEmpty(
                f"Index at {path} has mixed embedding dimensions {sorted(dims)}. {REBUILD_HINT}"
            )
        return records

    def save(self, records: list[ChunkRecord]) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [r.model_dump() for r in records]
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return self.path


def index_info(records: list[ChunkRecord]) -> dict:
    by_domain: dict[str, int] = {}
    for r in records:
        by_domain[r.domain] = by_domain.get(r.domain, 0) + 1
    return {"total": len(records), "byDomain": by_domain}
