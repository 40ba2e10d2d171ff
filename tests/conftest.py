"""
Shared fixtures: an in-memory stand-in for the OpenAI client and small indexes.
"""

from types import SimpleNamespace

import pytest

from resume_qa.index_store import ChunkRecord


class FakeEmbeddings:
    def __init__(self, vector_for, error=None):
        self.vector_for = vector_for
        self.error = error
        self.calls = []

    def create(self, model, input):
        self.calls.append({"model": model, "input": input})
        if self.error is not None:
            raise self.error
        texts = [input] if isinstance(input, str) else list(input)
        return SimpleNamespace(data=[SimpleNamespace(embedding=self.vector_for(t)) for t in texts])


class FakeCompletions:
    def __init__(self, reply="- Answer [C1]", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, vector_for=None, reply="- Answer [C1]", embed_error=None, chat_error=None):
        self.embeddings = FakeEmbeddings(vector_for or keyword_vector, error=embed_error)
        self.chat = SimpleNamespace(completions=FakeCompletions(reply, error=chat_error))


def keyword_vector(text: str) -> list[float]:
    """3-d toy embedding: (fynd-ness, personal-ness, bias)."""
    s = text.lower()
    return [
        3.0 if "fynd" in s else 0.0,
        3.0 if ("hobb" in s or "hike" in s) else 0.0,
        1.0,
    ]


def make_record(id, text, domain="resume", embedding=(1.0, 0.0), source=None):
    return ChunkRecord(
        id=id,
        text=text,
        source=source or f"{domain}.md",
        domain=domain,
        embedding=list(embedding),
    )


@pytest.fixture
def fake_client():
    return FakeOpenAI()


@pytest.fixture
def scenario_records():
    return [
        make_record(
            0,
            "Side project: ratl.ai is a company building AI agents for API testing.",
            domain="personal",
            embedding=(0.0, 0.0, 1.0),
        ),
        make_record(1, "Worked at Fynd as engineer", domain="resume", embedding=(1.0, 0.0, 0.0)),
        make_record(2, "Enjoys weekend hikes and film photography.", domain="personal", embedding=(0.0, 1.0, 0.0)),
    ]
