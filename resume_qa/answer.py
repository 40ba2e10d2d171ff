# resume_qa/answer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from openai import OpenAI, OpenAIError

from resume_qa.config import CHAT_MODEL, TOP_K
from resume_qa.embedder import Embedder
from resume_qa.errors import CompletionFailure
from resume_qa.index_store import ChunkRecord
from resume_qa.retriever import RetrievedChunk
from resume_qa.router import RoutedRetrieval, route_and_retrieve

TEMPERATURE = 0.2

STYLE_HINT = "- Limit the answer to at most two bullet points, each one sentence.\n"


def build_system_prompt(domain_hint: str) -> str:
    if domain_hint == "personal":
        scope = "personal profile"
    elif domain_hint == "resume":
        scope = "professional resume"
    else:
        scope = "provided context"
    return (
        f"You are a concise, highly professional assistant for answering questions about the user based on their {scope}.\n"
        "- Use ONLY the provided context for any facts about the user. If information is missing or ambiguous, say so and ask a clarifying question.\n"
        "- Write in a formal, clear tone. Return at most two bullet points, each one sentence.\n"
        "- Cite supporting snippets using bracketed citations like [C1], [C2], matching the provided context IDs.\n"
        "- Do NOT invent dates, titles, employers, or personal details. If unsure, request clarification.\n"
    )


def format_context(chunks: Sequence[RetrievedChunk]) -> str:
    return "\n\n".join(f"[{c.cid}] {c.text}" for c in chunks)


def build_user_prompt(question: str, chunks: Sequence[RetrievedChunk]) -> str:
    return (
        f"Context (snippets):\n\n{format_context(chunks)}\n\n"
        f"User question: {question}\n\n"
        "Instructions:\n"
        "- Answer using only the context for user-specific facts.\n"
        "- Include relevant citations [C#] after the sentences they support.\n"
        "- If the context does not contain the requested fact, say so and ask for the missing detail.\n"
        f"{STYLE_HINT}"
    )


@dataclass
class AnswerResult:
    output: str
    used: list[RetrievedChunk] = field(default_factory=list)
    domain_hint: str = "unknown"
    ensure_terms: list[str] = field(default_factory=list)


class QAService:
    """
    Everything a question needs, built once and shared by the CLI and the API:
    the loaded index, the embedding adapter and the chat client.
    """

    def __init__(
        self,
        client: OpenAI,
        embedder: Embedder,
        records: list[ChunkRecord],
        chat_model: str = CHAT_MODEL,
        top_k: int = TOP_K,
    ):
        self.client = client
        self.embedder = embedder
        self.records = records
        self.chat_model = chat_model
        self.top_k = top_k

    def retrieve(self, question: str, k: int | None = None) -> RoutedRetrieval:
        q_vec = self.embedder.embed_query(question)
        return route_and_retrieve(question, q_vec, self.records, self.top_k if k is None else k)

    def _chat_answer(self, system: str, user: str) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.chat_model,
                temperature=TEMPERATURE,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except OpenAIError as exc:
            raise CompletionFailure(f"Chat completion failed ({self.chat_model}): {exc}") from exc
        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()

    def answer(self, question: str, k: int | None = None) -> AnswerResult:
        routed = self.retrieve(question, k)
        output = self._chat_answer(
            build_system_prompt(routed.domain_hint),
            build_user_prompt(question, routed.results),
        )
        return AnswerResult(
            output=output,
            used=routed.results,
            domain_hint=routed.domain_hint,
            ensure_terms=routed.ensure_terms,
        )
