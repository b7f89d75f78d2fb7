"""
Tests for voice report extraction. The LLM is never called: the chat model
factory is patched with fakes.
"""
import pytest

from hostelhub.services import voice

TRANSCRIPT = 'the fan in room 101 is making sparks please send someone'

FALLBACK = {
    'title': 'Voice Report (Parse Failed)',
    'description': TRANSCRIPT,
    'category': 'OTHER',
    'priority': 'MEDIUM',
}


class FakeReply:
    def __init__(self, content):
        self.content = content


class FakeModel:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return FakeReply(self.content)


def use_model(monkeypatch, model):
    monkeypatch.setattr(voice, '_get_chat_model', lambda: model)
    return model


class TestFallback:

    def test_throwing_backend_returns_literal_fallback(self, monkeypatch):
        use_model(monkeypatch, FakeModel(error=TimeoutError('read timed out')))
        assert voice.ai_extract(TRANSCRIPT) == FALLBACK

    def test_missing_api_key_returns_fallback(self, monkeypatch):
        monkeypatch.setattr(voice.settings, 'OPENAI_API_KEY', None)
        assert voice.ai_extract(TRANSCRIPT) == FALLBACK

    @pytest.mark.parametrize('content', ['not json at all', '["a", "list"]', ''])
    def test_malformed_reply_returns_fallback(self, monkeypatch, content):
        use_model(monkeypatch, FakeModel(content=content))
        assert voice.ai_extract(TRANSCRIPT) == FALLBACK


class TestExtraction:

    def test_fenced_json_is_parsed(self, monkeypatch):
        model = use_model(monkeypatch, FakeModel(content=(
            '```json\n{"title": "Sparking fan", "description": "Fan in room 101 sparks.", '
            '"category": "ELECTRICAL", "priority": "EMERGENCY"}\n```'
        )))
        assert voice.ai_extract(TRANSCRIPT) == {
            'title': 'Sparking fan',
            'description': 'Fan in room 101 sparks.',
            'category': 'ELECTRICAL',
            'priority': 'EMERGENCY',
        }
        assert TRANSCRIPT in model.calls[0][1].content

    def test_missing_fields_take_defaults(self, monkeypatch):
        use_model(monkeypatch, FakeModel(content='{}'))
        assert voice.ai_extract(TRANSCRIPT) == {
            'title': 'Voice Report',
            'description': TRANSCRIPT,
            'category': 'OTHER',
            'priority': 'MEDIUM',
        }

    def test_legacy_and_unknown_labels(self, monkeypatch):
        use_model(monkeypatch, FakeModel(content='{"title": "Door", "category": "carpentry", "priority": "URGENT"}'))
        result = voice.ai_extract(TRANSCRIPT)
        assert result['category'] == 'FURNITURE'
        assert result['priority'] == 'EMERGENCY'

        use_model(monkeypatch, FakeModel(content='{"category": "GARDEN", "priority": "ASAP"}'))
        result = voice.ai_extract(TRANSCRIPT)
        assert (result['category'], result['priority']) == ('OTHER', 'MEDIUM')


class TestProcessVoiceRoute:

    def test_route_never_fails_hard(self, client, student_headers, monkeypatch):
        use_model(monkeypatch, FakeModel(error=RuntimeError('boom')))
        response = client.post('/ai/process-voice', json={'transcript': TRANSCRIPT}, headers=student_headers)

        assert response.status_code == 200
        body = response.json()
        assert body['title'] == 'Voice Report (Parse Failed)'
        assert body['description'] == TRANSCRIPT
        assert body['suggestion']['category'] == 'ELECTRICAL'

    def test_route_rejects_empty_transcript(self, client, student_headers):
        response = client.post('/ai/process-voice', json={'transcript': ''}, headers=student_headers)
        assert response.status_code == 422
