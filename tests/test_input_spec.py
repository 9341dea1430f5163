import pytest

from promptgate.errors import ValidationError
from promptgate.input_spec import IMAGE_REQUIRED, PROMPT_REQUIRED, parse_expand, parse_reverse


def test_parse_expand_minimal():
    spec = parse_expand({"prompt": "hi"})
    assert spec.prompt == "hi"
    assert spec.provider == "anthropic"
    assert spec.model is None
    assert spec.api_key is None


def test_parse_expand_normalizes_provider():
    spec = parse_expand({"prompt": "hi", "provider": " OpenAI ", "model": "gpt-4o-mini", "apiKey": "k"})
    assert spec.provider == "openai"
    assert spec.model == "gpt-4o-mini"
    assert spec.api_key == "k"


@pytest.mark.parametrize("req", [{}, {"prompt": ""}, {"prompt": 42}, []])
def test_parse_expand_requires_prompt(req):
    with pytest.raises(ValidationError) as exc:
        parse_expand(req)
    assert str(exc.value) == PROMPT_REQUIRED


def test_parse_reverse_requires_image_and_mime():
    with pytest.raises(ValidationError) as exc:
        parse_reverse({"imageBase64": "QUJD"})
    assert str(exc.value) == IMAGE_REQUIRED


def test_parse_reverse_strips_data_uri_prefix():
    spec = parse_reverse(
        {
            "imageBase64": "data:image/jpeg;base64,QUJD",
            "imageMimeType": "image/jpeg",
            "additionalContext": "  ",
        }
    )
    assert spec.image.data == "QUJD"
    assert spec.image.mime_type == "image/jpeg"
    assert spec.additional_context is None
