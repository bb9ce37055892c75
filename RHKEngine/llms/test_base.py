"""
Tests for LLMClient.

Run:
    python -m pytest RHKEngine/llms/test_base.py -v
"""

from types import SimpleNamespace

import pytest

from RHKEngine.llms.base import ConfigurationError, LLMClient


class FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content):
    completions = FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class TestLLMClient:
    def test_requires_key_and_model(self):
        with pytest.raises(ConfigurationError):
            LLMClient(api_key="", model_name="gemini-2.5-flash")
        with pytest.raises(ConfigurationError):
            LLMClient(api_key="key", model_name="")

    def test_invoke_vision_builds_request(self):
        client, completions = fake_client('  {"a": 1}  ')
        llm = LLMClient(api_key="key", model_name="gemini-2.5-flash", client=client)
        answer = llm.invoke_vision(
            "system",
            "user",
            image="data:image/png;base64,QUJD",
            response_schema={"type": "object"},
            temperature=0.4,
            stream=True,
        )

        assert answer == '{"a": 1}'
        sent = completions.kwargs
        assert sent["model"] == "gemini-2.5-flash"
        assert sent["temperature"] == 0.4
        assert "stream" not in sent
        assert sent["response_format"]["json_schema"]["schema"] == {"type": "object"}
        user_content = sent["messages"][1]["content"]
        assert user_content[0] == {"type": "text", "text": "user"}
        assert user_content[1]["image_url"]["url"] == "data:image/png;base64,QUJD"

    def test_text_only_request(self):
        client, completions = fake_client(None)
        llm = LLMClient(api_key="key", model_name="m", client=client)
        assert llm.invoke_vision("system", "user") == ""
        assert len(completions.kwargs["messages"][1]["content"]) == 1
        assert "response_format" not in completions.kwargs

    def test_model_info(self):
        client, _ = fake_client("")
        llm = LLMClient(
            api_key="key",
            model_name="gemini-2.5-flash",
            base_url="https://generativelanguage.googleapis.com/v1beta/openai/",
            client=client,
        )
        assert llm.get_model_info()["provider"] == "gemini"
