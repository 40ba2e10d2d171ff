# resume_qa/embedder.py
from __future__ import annotations

import numpy as np
from openai import OpenAI, OpenAIError

from resume_qa.config import EMBED_MODEL
from resume_qa.errors import EmbeddingFailure

BATCH = 64
EPS = 1e-12


def normalize(v: np.ndarray) -> np.ndarray:
    """v / max(||v||, eps): all-zero vectors stay zero instead of turning into NaN."""
    n = float(np.linalg.norm(v))
    return v / max(n, EPS)


class Embedder:
    """
    Thin wrapper over client.embeddings.create.
    Every returned vector is unit length; output order follows input order.
    """

    def __init__(self, client: OpenAI, model: str = EMBED_MODEL, batch_size: int = BATCH):
        self.client = client
        self.model = model
        self.batch_size = batch_size

    def _create(self, batch: list[str]) -> list[list[float]]:
        try:
            resp = self.client.embeddings.create(model=self.model, input=batch)
        except OpenAIError as exc:
            raise EmbeddingFailure(f"Embedding request failed ({self.model}): {exc}") from exc
        return [d.embedding for d in resp.data]

    def embed(self, texts: list[str], progress: bool = False) -> list[list[float]]:
        vectors: list[list[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = texts[i : i + self.batch_size]
            for raw in self._create(batch):
                v = normalize(np.asarray(raw, dtype=np.float64))
                vectors.append(v.tolist())
            if progress:
                print(f"Embedded {min(i + self.batch_size, len(texts))}/{len(texts)}", end="\r")
        if progress and texts:
            print()
        return vectors

    def embed_query(self, text: str) -> np.ndarray:
        raw = self._create([text])[0]
        return normalize(np.asarray(raw, dtype=np.float64))
