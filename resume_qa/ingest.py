# resume_qa/ingest.py
from __future__ import annotations

from openai import OpenAI

from resume_qa.chunker import split_into_chunks
from resume_qa.config import Settings, load_settings
from resume_qa.documents import load_documents
from resume_qa.embedder import Embedder
from resume_qa.errors import DocumentLoadError, EmbeddingFailure
from resume_qa.index_store import ChunkRecord, IndexStore

SHORT_TEXT_CHARS = 100


def build_index(settings: Settings, embedder: Embedder) -> list[ChunkRecord]:
    """
    Full rebuild: read documents, chunk, embed, overwrite the index file.
    ids are assigned in insertion order starting at 0.
    """
    docs = load_documents(settings.data_dir)
    print(f"Files found: {[d.source for d in docs]}")

    for d in docs:
        if len(d.text.strip()) < SHORT_TEXT_CHARS:
            print(
                f"WARNING: extracted text from {d.source} seems short. "
                "PDF extraction may be lossy. Consider DOCX/MD."
            )
    print(f"Extracted characters (all docs): {sum(len(d.text) for d in docs)}")

    texts: list[str] = []
    metas: list[tuple[str, str]] = []
    for d in docs:
        chunks = split_into_chunks(
            d.text,
            chunk_size=settings.chunk_size_chars,
            overlap=settings.chunk_overlap_chars,
        )
        print(f"{d.source} ({d.domain}) -> {len(chunks)} chunks")
        for c in chunks:
            texts.append(c)
            metas.append((d.source, d.domain))

    if not texts:
        raise DocumentLoadError("No chunks produced. Check the documents under the data directory.")

    print(f"Total chunks: {len(texts)}")
    print(f"First chunk lengths: {[len(t) for t in texts[:5]]}")

    vectors = embedder.embed(texts, progress=True)
    if len(vectors) != len(texts):
        raise EmbeddingFailure(f"Expected {len(texts)} embeddings, got {len(vectors)}")
    print(f"Embeddings shape: [{len(vectors)}, {len(vectors[0]) if vectors else 0}]")

    records = [
        ChunkRecord(id=i, text=text, source=source, domain=domain, embedding=vec)
        for i, (text, (source, domain), vec) in enumerate(zip(texts, metas, vectors))
    ]

    store = IndexStore(settings.index_path, settings.legacy_index_path)
    path = store.save(records)
    print(f"OK: wrote {len(records)} chunks -> {path}")
    return records


def main() -> None:
    settings = load_settings()
    client = OpenAI(api_key=settings.require_api_key())

    print(f"Embedding model: {settings.embed_model}")
    build_index(settings, Embedder(client, model=settings.embed_model))


if __name__ == "__main__":
    main()
