from types import SimpleNamespace

import config
import llm


class FakeClient:
    """Stands in for openai.OpenAI; records the requests it gets."""

    def __init__(self, reply=None, error=None):
        self.requests = []
        self.reply = reply
        self.error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        choices = [] if self.reply is None else [SimpleNamespace(message=SimpleNamespace(content=self.reply))]
        return SimpleNamespace(choices=choices)


def test_get_client_uses_config():
    client = llm.get_client()

    assert str(client.base_url).rstrip("/") == config.LLM_BASE_URL.rstrip("/")
    assert client.max_retries == config.LLM_MAX_RETRIES


def test_query_llm_sends_one_user_message():
    client = FakeClient(reply="hello")

    assert llm.query_llm("hi there", client) == "hello"
    assert client.requests[0]["model"] == config.LLM_MODEL
    assert client.requests[0]["messages"] == [{"role": "user", "content": "hi there"}]


def test_query_llm_returns_empty_on_error():
    assert llm.query_llm("hi", FakeClient(error=RuntimeError("connection refused"))) == ""


def test_query_llm_returns_empty_without_choices():
    assert llm.query_llm("hi", FakeClient()) == ""


def test_word_entry_prompt_includes_instructions():
    client = FakeClient(reply='{"strong": "G3056", "senses": []}')
    entry = llm.word_entry_from_llm("* Strongs: G3056", client)

    assert entry.strong == "G3056"
    assert client.requests[0]["messages"][0]["content"] == llm.INSTRUCTIONS + " * Strongs: G3056"


def test_word_entry_tolerates_loose_fields():
    client = FakeClient(reply='{"strong": "G3056", "senses": [{"definition": "word"}, "junk", {"number": 2, "citations": null}]}')
    entry = llm.word_entry_from_llm("x", client)

    assert [s.definition for s in entry.senses] == ["word", ""]
    assert entry.senses[1].number == "2"
    assert entry.senses[1].citations == []


def test_word_entry_rejects_non_objects():
    assert llm.word_entry_from_llm("x", FakeClient(reply="[1, 2]")) is None
    assert llm.word_entry_from_llm("x", FakeClient(reply="not json")) is None
    assert llm.word_entry_from_llm("x", FakeClient(error=RuntimeError("boom"))) is None
