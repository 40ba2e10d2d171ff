import numpy as np
import pytest
from openai import OpenAIError

from resume_qa.answer import QAService, build_system_prompt, build_user_prompt, format_context
from resume_qa.embedder import Embedder
from resume_qa.errors import CompletionFailure
from resume_qa.retriever import retrieve
from tests.conftest import FakeOpenAI, make_record


def make_service(client, records, k=2):
    return QAService(client, Embedder(client), records, chat_model="test-chat", top_k=k)


def test_context_block_uses_citation_ids():
    records = [make_record(0, "first", embedding=(1.0, 0.0)), make_record(1, "second", embedding=(0.0, 1.0))]
    chunks = retrieve(np.array([1.0, 0.0]), records, k=2)

    assert format_context(chunks) == "[C1] first\n\n[C2] second"
    prompt = build_user_prompt("Who?", chunks)
    assert prompt.startswith("Context (snippets):\n\n[C1] first\n\n[C2] second\n\nUser question: Who?")
    assert "Include relevant citations [C#]" in prompt


@pytest.mark.parametrize(
    "hint, scope",
    [("personal", "personal profile"), ("resume", "professional resume"), ("both", "provided context")],
)
def test_system_prompt_scope(hint, scope):
    prompt = build_system_prompt(hint)
    assert f"based on their {scope}." in prompt
    assert "at most two bullet points" in prompt


def test_answer_routes_and_calls_chat(scenario_records):
    client = FakeOpenAI(reply="  - Works on ratl.ai [C1]  ")
    service = make_service(client, scenario_records)

    result = service.answer("What do you work on at Fynd?")

    assert result.output == "- Works on ratl.ai [C1]"
    assert [c.id for c in result.used] == [0, 1]
    assert result.ensure_terms == ["ratl.ai", "about ratl.ai"]

    call = client.chat.completions.calls[0]
    assert call["model"] == "test-chat"
    assert call["temperature"] == 0.2
    system, user = call["messages"]
    assert "professional resume" in system["content"]
    assert "[C1] Side project: ratl.ai" in user["content"]


def test_empty_completion_returns_empty_string(scenario_records):
    client = FakeOpenAI(reply=None)
    assert make_service(client, scenario_records).answer("Hello there").output == ""


def test_chat_errors_become_completion_failure(scenario_records):
    client = FakeOpenAI(chat_error=OpenAIError("server overloaded"))
    with pytest.raises(CompletionFailure, match="server overloaded"):
        make_service(client, scenario_records).answer("What are your hobbies?")


def test_explicit_zero_k_retrieves_nothing(scenario_records):
    service = make_service(FakeOpenAI(), scenario_records, k=2)

    assert service.retrieve("What are your hobbies?", k=0).results == []
    assert len(service.retrieve("What are your hobbies?").results) == 2
