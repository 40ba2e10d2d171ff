from __future__ import annotations

from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import OpenAI
from pydantic import BaseModel

from resume_qa.answer import QAService
from resume_qa.config import Settings, load_settings
from resume_qa.embedder import Embedder
from resume_qa.errors import IndexMissingOrEmpty, ResumeQAError
from resume_qa.index_store import REBUILD_HINT, IndexStore, index_info
from resume_qa.ingest import build_index
from resume_qa.retriever import retrieve as rank_chunks

DOMAINS = ("resume", "personal")


class ChatRequest(BaseModel):
    question: str


class RetrieveRequest(BaseModel):
    query: str
    domain: str | None = None


app = FastAPI(title="Resume QA API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

settings: Settings | None = None
service: QAService | None = None


@app.on_event("startup")
def startup():
    """
    Optionally rebuilds the index, then loads it once at boot.
    Configuration or index errors abort startup: the server never serves without an index.
    """
    global settings, service

    settings = load_settings()
    client = OpenAI(api_key=settings.require_api_key())
    embedder = Embedder(client, model=settings.embed_model)

    if settings.build_index_on_startup:
        print("[startup] Building index...")
        build_index(settings, embedder)
        print("[startup] Index built successfully.")

    records = IndexStore(settings.index_path, settings.legacy_index_path).load()
    service = QAService(client, embedder, records, chat_model=settings.chat_model, top_k=settings.top_k)


def _service() -> QAService:
    if service is None:
        raise IndexMissingOrEmpty(f"Index not loaded. {REBUILD_HINT}")
    return service


@app.exception_handler(ResumeQAError)
async def resume_qa_error(_request: Request, exc: ResumeQAError):
    return JSONResponse(status_code=500, content={"detail": str(exc) or "internal error"})


@app.get("/health")
def health():
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


@app.get("/index-info")
def get_index_info():
    return index_info(_service().records)


@app.post("/retrieve")
def retrieve(req: RetrieveRequest):
    """Raw retrieval for debugging: domain filter only, no routing or ensure terms."""
    query = req.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="query (string) is required")
    if req.domain and req.domain not in DOMAINS:
        raise HTTPException(status_code=400, detail="domain must be 'resume' or 'personal'")

    svc = _service()
    q_vec = svc.embedder.embed_query(query)
    results = rank_chunks(q_vec, svc.records, svc.top_k, domain_filter=req.domain or None)
    return {
        "query": query,
        "k": svc.top_k,
        "domain": req.domain or "all",
        "results": [r.model_dump() for r in results],
    }


@app.post("/chat")
def chat(req: ChatRequest):
    question = req.question.strip()
    if not question:
        raise HTTPException(status_code=400, detail="question (string) is required")

    result = _service().answer(question)
    return {"question": question, "answer": result.output}


def main() -> None:
    import uvicorn

    port = load_settings().port
    uvicorn.run("resume_qa.api:app", host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
