# resume_qa/logger.py
import json
from datetime import datetime
from pathlib import Path

PREVIEW_CHARS = 300


def retrieved_entries(chunks) -> list:
    """Compact, JSON-friendly view of retrieved chunks (no embeddings)."""
    return [
        {
            "cid": c.cid,
            "id": c.id,
            "source": c.source,
            "domain": c.domain,
            "score": round(float(c.score), 4),
            "text_preview": c.text[:PREVIEW_CHARS],
        }
        for c in chunks
    ]


def write_run_log(logs_dir, payload: dict, prefix: str = "run") -> str:
    """
    Writes one JSON log file per run.
    Returns the saved file path.
    """
    Path(logs_dir).mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = Path(logs_dir) / f"{prefix}_{ts}.json"

    record = {"logged_at": datetime.now().isoformat(timespec="seconds"), **payload}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record, f, ensure_ascii=False, indent=2)

    return str(path)
