# resume_qa/chunker.py
from __future__ import annotations

from langchain_text_splitters import RecursiveCharacterTextSplitter

# paragraph -> line -> sentence -> word -> character
SEPARATORS = ["\n\n", "\n", ". ", " ", ""]

# chunks this short (after trimming) are mostly headers and page noise
MIN_CHUNK_CHARS = 50


def split_into_chunks(text: str, chunk_size: int = 1000, overlap: int = 120) -> list[str]:
    """
    Recursive split: use the largest separator that keeps pieces under
    chunk_size, fall back to smaller ones for oversized pieces. Neighbouring
    chunks share up to `overlap` characters.
    Chunks are trimmed and anything of MIN_CHUNK_CHARS or less is dropped.
    """
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=overlap,
        separators=SEPARATORS,
        length_function=len,
    )
    chunks = [c.strip() for c in splitter.split_text(text)]
    return [c for c in chunks if len(c) > MIN_CHUNK_CHARS]
