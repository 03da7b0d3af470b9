import types

import pytest
from openai import OpenAIError

from bannergen import llm
from bannergen.errors import ArtifactFormatError, ConfigurationError, GenerationServiceError

SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="1200" height="630"><rect width="1200" height="630"/></svg>'


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = types.SimpleNamespace(content=self.content)
        return types.SimpleNamespace(choices=[types.SimpleNamespace(message=message)])


def _fake_openai(completions):
    return types.SimpleNamespace(chat=types.SimpleNamespace(completions=completions))


def test_extract_svg_strips_code_fence_and_commentary():
    text = f"Here is your banner:\n```svg\n{SVG}\n```\nLet me know if you want changes!"
    assert llm.extract_svg(text) == SVG


def test_extract_svg_is_case_insensitive():
    text = "<SVG viewBox='0 0 10 10'><g/></SVG> trailing"
    assert llm.extract_svg(text) == "<SVG viewBox='0 0 10 10'><g/></SVG>"


def test_extract_svg_keeps_nested_svg_and_ignores_siblings():
    nested = "<svg><svg x='1'><circle r='2'/></svg><text>hi</text></svg>"
    text = f"{nested}\n<svg><rect/></svg>"
    assert llm.extract_svg(text) == nested


def test_extract_svg_skips_unclosed_opening_tag():
    text = "<svg width='1200'><rect/>\n(truncated)\n<svg><rect/></svg>"
    assert llm.extract_svg(text) == "<svg><rect/></svg>"


def test_extract_svg_ignores_prose_mentioning_the_tag():
    text = "Use an <svg element like this: <svg width='1'><rect/></svg>"
    assert llm.extract_svg(text) == "<svg width='1'><rect/></svg>"


@pytest.mark.parametrize(
    "text",
    ["", "I cannot draw that.", "<svg width='1200'><rect/>", "<svgfoo></svgfoo>", "</svg>"],
)
def test_extract_svg_without_fragment_raises(text):
    with pytest.raises(ArtifactFormatError) as excinfo:
        llm.extract_svg(text)
    assert excinfo.value.public_message == "Failed to generate banner with AI"


def test_client_requires_api_key():
    with pytest.raises(ConfigurationError) as excinfo:
        llm.OpenAIGenerationClient(api_key="")
    assert "OPENAI_API_KEY" in str(excinfo.value)


def test_get_generation_client_reads_environment(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        llm.get_generation_client()

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    client = llm.get_generation_client()
    assert isinstance(client, llm.OpenAIGenerationClient)
    assert client.model == "gpt-4o"


def test_generate_sends_system_and_user_messages(monkeypatch):
    monkeypatch.setenv("OPENAI_BANNER_SYSTEM_PROMPT", "Be an SVG designer.")
    completions = _FakeCompletions(content=SVG)
    client = llm.OpenAIGenerationClient(
        api_key="sk-test", model="gpt-4o-mini", client=_fake_openai(completions), max_tokens=1500
    )

    assert client.generate("Draw a banner") == SVG

    (call,) = completions.calls
    assert call["model"] == "gpt-4o-mini"
    assert call["max_completion_tokens"] == 1500
    assert call["messages"] == [
        {"role": "system", "content": "Be an SVG designer."},
        {"role": "user", "content": "Draw a banner"},
    ]


def test_generate_returns_empty_string_for_missing_content():
    client = llm.OpenAIGenerationClient(api_key="sk-test", client=_fake_openai(_FakeCompletions(content=None)))
    assert client.generate("Draw a banner") == ""


def test_generate_wraps_openai_errors_without_retrying():
    completions = _FakeCompletions(error=OpenAIError("quota exceeded"))
    client = llm.OpenAIGenerationClient(api_key="sk-test", client=_fake_openai(completions))

    with pytest.raises(GenerationServiceError) as excinfo:
        client.generate("Draw a banner")

    assert "quota exceeded" in str(excinfo.value)
    assert len(completions.calls) == 1


def test_generate_without_choices_raises_generation_error():
    completions = _FakeCompletions()
    completions.create = lambda **kwargs: types.SimpleNamespace(choices=[])
    client = llm.OpenAIGenerationClient(api_key="sk-test", client=_fake_openai(completions))

    with pytest.raises(GenerationServiceError) as excinfo:
        client.generate("Draw a banner")
    assert excinfo.value.public_message == "Failed to generate banner with AI"
