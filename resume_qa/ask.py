from __future__ import annotations

import sys

from openai import OpenAI

from resume_qa.answer import AnswerResult, QAService
from resume_qa.config import Settings, load_settings
from resume_qa.embedder import Embedder
from resume_qa.index_store import IndexStore
from resume_qa.logger import retrieved_entries, write_run_log

PREVIEW_CHARS = 200


def build_service(settings: Settings) -> QAService:
    client = OpenAI(api_key=settings.require_api_key())
    records = IndexStore(settings.index_path, settings.legacy_index_path).load()
    return QAService(
        client,
        Embedder(client, model=settings.embed_model),
        records,
        chat_model=settings.chat_model,
        top_k=settings.top_k,
    )


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def print_result(result: AnswerResult) -> None:
    print("\n=== Answer ===")
    print(result.output.strip())
    print("\n=== Citations Used ===")
    for c in result.used:
        print(f"[{c.cid}] {preview(c.text)}")


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    question = " ".join(args).strip()
    if not question:
        question = input("Ask a question about the resume: ").strip()
    if not question:
        raise SystemExit('Usage: python -m resume_qa.ask "Your question here"')

    settings = load_settings()
    service = build_service(settings)
    result = service.answer(question)
    print_result(result)

    # ---- Save log ----
    log_path = write_run_log(
        settings.logs_dir,
        {
            "question": question,
            "domain_hint": result.domain_hint,
            "ensure_terms": result.ensure_terms,
            "top_k": len(result.used),
            "retrieved": retrieved_entries(result.used),
            "answer": result.output,
        },
        prefix="ask",
    )
    print(f"\n[LOG SAVED] {log_path}\n")


if __name__ == "__main__":
    main()
