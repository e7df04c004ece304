"""Tests for LLM-backed taxonomy discovery."""

import json
from unittest.mock import Mock, patch

import httpx
import openai
import pytest
from diskcache import Cache

from reviewlens.core.errors import CollaboratorError
from reviewlens.services.llm import (
    FallbackLLMService,
    LLMServiceFactory,
    OpenAIService,
    parse_taxonomy_response,
)

REPLY = json.dumps({
    "aspects": [
        {"name": "Battery Life", "description": "How long it lasts", "keywords": ["battery", "battery life"]},
        {"name": "Packaging", "description": "Box", "keywords": ["box", "packaging"]},
        {"name": "Nothing", "description": "No keywords", "keywords": []},
    ]
})


def _response(content):
    response = Mock()
    response.choices = [Mock(message=Mock(content=content))]
    return response


def _client(*contents):
    client = Mock()
    client.chat.completions.create.side_effect = [_response(c) for c in contents]
    return client


class TestParseTaxonomyResponse:
    """Test parsing of the model reply."""

    def test_valid_reply(self):
        taxonomy = parse_taxonomy_response(REPLY)
        assert [a.name for a in taxonomy] == ["Battery Life", "Packaging"]
        assert taxonomy[0].keywords == ("battery", "battery life")

    def test_code_fences_and_trailing_commas(self):
        content = '```json\n{"aspects": [{"name": "Taste", "keywords": ["taste",]},]}\n```'
        assert parse_taxonomy_response(content)[0].name == "Taste"

    def test_prose_around_json(self):
        content = 'Here is the taxonomy: {"aspects": [{"name": "Taste", "keywords": ["taste"]}]} Enjoy!'
        assert parse_taxonomy_response(content)[0].keywords == ("taste",)

    def test_not_json(self):
        with pytest.raises(CollaboratorError) as exc_info:
            parse_taxonomy_response("Sorry, I cannot help with that.")
        assert exc_info.value.raw_response == "Sorry, I cannot help with that."

    def test_missing_aspects(self):
        with pytest.raises(CollaboratorError):
            parse_taxonomy_response('{"categories": []}')

    def test_non_object_aspects(self):
        with pytest.raises(CollaboratorError):
            parse_taxonomy_response('{"aspects": ["Taste", "Price"]}')

    def test_empty_list_is_valid(self):
        assert parse_taxonomy_response('{"aspects": []}') == []


class TestOpenAIService:
    """Test OpenAIService with a mocked client."""

    def setup_method(self):
        self.top_words = ["battery life", "box", "screen"]
        self.samples = ["Battery life is great.", "The box was crushed."]

    def test_discover_taxonomy(self, tmp_path):
        client = _client(REPLY)
        service = OpenAIService(client=client, cache=Cache(str(tmp_path)), model="test-model")

        taxonomy = service.discover_taxonomy(self.top_words, self.samples)

        assert [a.name for a in taxonomy] == ["Battery Life", "Packaging"]
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["response_format"] == {"type": "json_object"}
        prompt = kwargs["messages"][1]["content"]
        assert "battery life, box, screen" in prompt
        assert '- "The box was crushed."' in prompt

    def test_prompt_carries_review_count(self, tmp_path):
        client = _client(REPLY)
        service = OpenAIService(client=client, cache=Cache(str(tmp_path)), model="test-model")

        service.discover_taxonomy(self.top_words, self.samples, review_count=3)

        prompt = client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        assert "(3 reviews)" in prompt
        assert "(many reviews)" not in prompt

    def test_responses_are_cached(self, tmp_path):
        client = _client(REPLY)
        service = OpenAIService(client=client, cache=Cache(str(tmp_path)), model="test-model")

        first = service.discover_taxonomy(self.top_words, self.samples)
        second = service.discover_taxonomy(self.top_words, self.samples)

        assert first == second
        assert client.chat.completions.create.call_count == 1

    def test_empty_reply(self, tmp_path):
        service = OpenAIService(client=_client(""), cache=Cache(str(tmp_path)), model="test-model")
        with pytest.raises(CollaboratorError):
            service.discover_taxonomy(self.top_words, self.samples)

    @patch("time.sleep")
    def test_api_errors_are_retried(self, mock_sleep, tmp_path):
        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
        client = Mock()
        client.chat.completions.create.side_effect = [error, _response(REPLY)]
        service = OpenAIService(client=client, cache=Cache(str(tmp_path)), model="test-model")

        taxonomy = service.discover_taxonomy(self.top_words, self.samples)

        assert len(taxonomy) == 2
        assert client.chat.completions.create.call_count == 2

    @patch("time.sleep")
    def test_persistent_failure_is_collaborator_error(self, mock_sleep, tmp_path):
        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
        client = Mock()
        client.chat.completions.create.side_effect = error
        service = OpenAIService(client=client, cache=Cache(str(tmp_path)), model="test-model")

        with pytest.raises(CollaboratorError):
            service.discover_taxonomy(self.top_words, self.samples)
        assert client.chat.completions.create.call_count == 3

    def test_build_prompt_truncates_samples(self, tmp_path):
        service = OpenAIService(client=Mock(), cache=Cache(str(tmp_path)), model="test-model")
        prompt = service.build_prompt(["taste"], ["word " * 500], review_count=1200)
        assert "(1200 reviews)" in prompt
        assert "word " * 100 not in prompt


class TestFallbackLLMService:
    """Test the offline fallback."""

    def test_picks_predefined_taxonomy(self):
        service = FallbackLLMService()
        taxonomy = service.discover_taxonomy(["battery life", "screen", "charging"], [])
        assert service.taxonomy_source == "predefined"
        assert "Battery Life" in [a.name for a in taxonomy]


class TestLLMServiceFactory:
    """Test service selection."""

    @patch("reviewlens.services.llm.settings")
    def test_without_key(self, mock_settings):
        mock_settings.effective_openai_key = ""
        assert isinstance(LLMServiceFactory.create(), FallbackLLMService)

    @patch("reviewlens.services.llm.Cache")
    @patch("reviewlens.services.llm.openai.OpenAI")
    @patch("reviewlens.services.llm.settings")
    def test_with_key(self, mock_settings, mock_openai, mock_cache):
        mock_settings.effective_openai_key = "sk-test"
        mock_settings.openai_model = "gpt-4o-mini"
        service = LLMServiceFactory.create()
        assert isinstance(service, OpenAIService)
        mock_openai.assert_called_once_with(api_key="sk-test")


if __name__ == "__main__":
    pytest.main([__file__])
