# resume_qa/router.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from resume_qa.index_store import ChunkRecord
from resume_qa.retriever import RetrievedChunk, retrieve

PERSONAL_KEYS = [
    "hobby",
    "hobbies",
    "interest",
    "interests",
    "free time",
    "outside work",
    "outside of work",
    "weekend",
    "leisure",
    "music",
    "books",
    "reading",
    "travel",
    "sports",
    "volunteer",
    "volunteering",
    "hike",
    "gaming",
    "family",
    "pets",
    "art",
    "photography",
]

RESUME_KEYS = [
    "resume",
    "cv",
    "experience",
    "work",
    "role",
    "title",
    "employer",
    "company",
    "education",
    "skill",
    "project",
    "years",
    "responsibil",
    "achievement",
]

# trigger substring -> terms whose chunks must be in the results.
# ratl.ai context is described in the personal docs, not under the Fynd role.
ENSURE_RULES: dict[str, list[str]] = {
    "fynd": ["ratl.ai", "about ratl.ai"],
}


def classify_question(question: str) -> str:
    """Returns one of: resume, personal, both, unknown."""
    s = question.lower()
    is_personal = any(k in s for k in PERSONAL_KEYS)
    is_resume = any(k in s for k in RESUME_KEYS)
    if is_personal and is_resume:
        return "both"
    if is_personal:
        return "personal"
    if is_resume:
        return "resume"
    return "unknown"


def ensure_terms_for_question(question: str, rules: dict[str, list[str]] | None = None) -> list[str]:
    s = question.lower()
    terms: list[str] = []
    for trigger, ensure in (ENSURE_RULES if rules is None else rules).items():
        if trigger.lower() in s:
            terms.extend(t for t in ensure if t not in terms)
    return terms


@dataclass
class RoutedRetrieval:
    domain_hint: str
    ensure_terms: list[str]
    results: list[RetrievedChunk] = field(default_factory=list)


def route_and_retrieve(
    question: str,
    q_vec: np.ndarray,
    records: Sequence[ChunkRecord],
    k: int = 5,
    rules: dict[str, list[str]] | None = None,
) -> RoutedRetrieval:
    """
    - ensure terms present: whole index, ensure terms promoted
    - personal: personal docs only, whole index if nothing personal exists
    - resume: resume docs only
    - both / unknown: whole index
    """
    hint = classify_question(question)
    ensure = ensure_terms_for_question(question, rules)

    if ensure:
        results = retrieve(q_vec, records, k, ensure_terms=ensure)
    elif hint == "personal":
        results = retrieve(q_vec, records, k, domain_filter="personal")
        if not results:
            results = retrieve(q_vec, records, k)
    elif hint == "resume":
        results = retrieve(q_vec, records, k, domain_filter="resume")
    else:
        results = retrieve(q_vec, records, k)

    return RoutedRetrieval(domain_hint=hint, ensure_terms=ensure, results=results)
