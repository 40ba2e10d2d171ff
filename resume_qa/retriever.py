# resume_qa/retriever.py
from __future__ import annotations

from typing import Sequence

import numpy as np
from pydantic import BaseModel

from resume_qa.index_store import ChunkRecord

EPS = 1e-12


class RetrievedChunk(BaseModel):
    id: int
    text: str
    source: str
    domain: str
    score: float
    cid: str  # C1..Ck, positional within one result list


def cosine(a: np.ndarray, b: np.ndarray) -> float:
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b) + EPS))


def _cosine_rows(matrix: np.ndarray, q_vec: np.ndarray) -> np.ndarray:
    dots = matrix @ q_vec
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(q_vec) + EPS
    return dots / norms


def retrieve(
    q_vec: np.ndarray,
    records: Sequence[ChunkRecord],
    k: int = 5,
    domain_filter: str | None = None,
    ensure_terms: Sequence[str] | None = None,
) -> list[RetrievedChunk]:
    """
    Ranks records against an already-normalized query vector.

    1) optional domain filter (empty after filtering -> [])
    2) cosine score, sorted descending; ties keep index order
    3) records whose text contains any ensure term (case-insensitive) move
       to the front, in score order, one entry per id
    4) truncate to k and label C1..Ck
    """
    candidates = [r for r in records if domain_filter is None or r.domain == domain_filter]
    if not candidates:
        return []

    matrix = np.array([r.embedding for r in candidates], dtype=np.float64)
    sims = _cosine_rows(matrix, np.asarray(q_vec, dtype=np.float64))
    ranked = np.argsort(-sims, kind="stable")
    scored = [(candidates[int(i)], float(sims[int(i)])) for i in ranked]

    ensure = [t.lower() for t in (ensure_terms or []) if t]
    ensured: list[tuple[ChunkRecord, float]] = []
    seen: set[int] = set()
    if ensure:
        for rec, score in scored:
            text = rec.text.lower()
            if rec.id not in seen and any(t in text for t in ensure):
                seen.add(rec.id)
                ensured.append((rec, score))

    rest = [(rec, score) for rec, score in scored if rec.id not in seen]
    final = (ensured + rest)[: max(k, 0)]

    return [
        RetrievedChunk(
            id=rec.id,
            text=rec.text,
            source=rec.source,
            domain=rec.domain,
            score=score,
            cid=f"C{rank}",
        )
        for rank, (rec, score) in enumerate(final, start=1)
    ]
