import asyncio

import pytest

from polyimage.adapter import GeminiAdapter
from polyimage.core.capabilities import GEMINI_CAPABILITY
from polyimage.core.errors import AuthenticationError, InvalidRequestError
from polyimage.core.types import AdapterConfig

ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-3-pro-image-preview:generateContent"
)

SUCCESS_BODY = {
    "candidates": [
        {
            "content": {
                "parts": [{"inlineData": {"mimeType": "image/png", "data": "base64imagedata"}}],
                "role": "model",
            },
            "finishReason": "STOP",
            "index": 0,
        }
    ],
    "usageMetadata": {"promptTokenCount": 25, "totalTokenCount": 25},
}


@pytest.fixture
def adapter(transport):
    return GeminiAdapter(AdapterConfig(api_key="test-gemini-key"), transport=transport)


def test_defaults(adapter):
    assert adapter.model == "gemini-3-pro-image-preview"


def test_reads_api_key_from_environment(monkeypatch, transport):
    monkeypatch.setenv("GEMINI_API_KEY", "env-gemini-key")

    assert GeminiAdapter(transport=transport).api_key == "env-gemini-key"


async def test_generate_request(adapter, transport):
    transport.queue(200, SUCCESS_BODY)

    await adapter.generate("A sunset")

    call = transport.calls[0]
    assert (call.method, call.url) == ("POST", ENDPOINT)
    assert call.headers == {"x-goog-api-key": "test-gemini-key"}
    assert call.json == {"contents": [{"parts": [{"text": "A sunset"}]}]}


async def test_negative_prompt_is_appended(adapter, transport):
    await adapter.generate("A sunset", negative_prompt="clouds")

    assert transport.calls[0].json["contents"][0]["parts"][0] == {"text": "A sunset. Avoid: clouds"}


async def test_generation_config(adapter, transport):
    await adapter.generate("A sunset", n=3, seed=12345, aspect_ratio="16:9")

    assert transport.calls[0].json["generationConfig"] == {
        "candidateCount": 3,
        "seed": 12345,
        "imageConfig": {"aspectRatio": "16:9"},
    }


async def test_sample_count_wins_over_n(adapter, transport):
    await adapter.generate("A sunset", n=2, sample_count=4)

    assert transport.calls[0].json["generationConfig"] == {"candidateCount": 4}


async def test_unrelated_options_do_not_add_generation_config(adapter, transport):
    await adapter.generate("A sunset", size="1024x1024")

    assert "generationConfig" not in transport.calls[0].json


async def test_image_parts(adapter, transport):
    await adapter.generate(
        "Edit",
        images=[
            "https://example.com/a.jpg",
            "https://example.com/no-extension",
            {"base64": "aGVsbG8=", "mimeType": "image/png"},
        ],
    )

    assert transport.calls[0].json["contents"][0]["parts"] == [
        {"text": "Edit"},
        {"fileData": {"fileUri": "https://example.com/a.jpg", "mimeType": "image/jpeg"}},
        {"fileData": {"fileUri": "https://example.com/no-extension"}},
        {"inlineData": {"data": "aGVsbG8=", "mimeType": "image/png"}},
    ]


async def test_image_count_limit(adapter, transport):
    maximum = GEMINI_CAPABILITY.max_images
    images = [f"https://example.com/{i}.png" for i in range(maximum + 1)]

    with pytest.raises(InvalidRequestError, match=f"{maximum + 1} provided, maximum is {maximum}"):
        await adapter.generate("x", images=images)

    assert transport.calls == []


async def test_generate_parses_response(adapter, transport):
    transport.queue(200, SUCCESS_BODY)

    result = await adapter.generate("A sunset")

    assert [image.to_dict() for image in result.images] == [
        {"base64": "base64imagedata", "mime_type": "image/png"}
    ]
    assert result.created is None


async def test_response_flattens_candidates_and_skips_text(adapter, transport):
    transport.queue(
        200,
        {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {"text": "Here you go"},
                            {"inlineData": {"mimeType": "image/png", "data": "image1data"}},
                            {"inlineData": {"mimeType": "image/png", "data": "image2data"}},
                        ]
                    }
                },
                {"content": {"parts": [{"inline_data": {"data": "image3data"}}]}},
                {"finishReason": "SAFETY"},
            ]
        },
    )

    result = await adapter.generate("Multiple images")

    assert [image.base64 for image in result.images] == ["image1data", "image2data", "image3data"]
    assert result.images[2].to_dict() == {"base64": "image3data"}


async def test_response_skips_malformed_entries(adapter, transport):
    transport.queue(
        200,
        {
            "candidates": [
                None,
                {"content": None},
                {"content": {"parts": None}},
                {
                    "content": {
                        "parts": [
                            None,
                            {"inlineData": None},
                            {"inlineData": {"mimeType": "image/png", "data": "imagedata"}},
                        ]
                    }
                },
            ]
        },
    )

    result = await adapter.generate("A sunset")

    assert [image.to_dict() for image in result.images] == [
        {"base64": "imagedata", "mime_type": "image/png"}
    ]


async def test_missing_candidates_yields_no_images(adapter, transport):
    transport.queue(200, {"promptFeedback": {"blockReason": "SAFETY"}})

    result = await adapter.generate("A sunset")

    assert result.images == []


async def test_generate_maps_errors(adapter, transport):
    transport.queue(401, {"error": "Invalid API key"})

    with pytest.raises(AuthenticationError):
        await adapter.generate("A sunset")


async def test_list_models(adapter, transport):
    transport.queue(
        200,
        {
            "models": [
                {"name": "models/gemini-2.5-flash-image", "supportedGenerationMethods": ["generateContent"]},
                {"name": "models/gemini-3-pro-image-preview", "supportedGenerationMethods": ["generateContent"]},
                {"name": "models/gemini-2.5-pro", "supportedGenerationMethods": ["generateContent"]},
                {"name": "models/imagen-3.0-generate-002", "supportedGenerationMethods": ["predict"]},
            ]
        },
    )

    models = await adapter.list_models()

    assert models == ["gemini-2.5-flash-image", "gemini-3-pro-image-preview"]
    call = transport.calls[0]
    assert (call.method, call.url) == (
        "GET",
        "https://generativelanguage.googleapis.com/v1beta/models",
    )
    assert call.headers == {"x-goog-api-key": "test-gemini-key"}


async def test_list_models_falls_back_on_timeout(adapter, transport):
    transport.queue_error(asyncio.TimeoutError())

    assert await adapter.list_models() == list(GEMINI_CAPABILITY.known_models)


async def test_list_models_falls_back_when_empty(adapter, transport):
    transport.queue(200, {"models": []})

    assert await adapter.list_models() == list(GEMINI_CAPABILITY.known_models)
    await adapter.list_models()
    assert len(transport.calls) == 1


async def test_list_models_skips_malformed_entries(adapter, transport):
    transport.queue(
        200,
        {
            "models": [
                None,
                "models/gemini-2.5-flash-image",
                {"name": None, "supportedGenerationMethods": ["generateContent"]},
                {"name": "models/gemini-2.5-flash-image", "supportedGenerationMethods": None},
                {"name": "models/gemini-3-pro-image-preview", "supportedGenerationMethods": ["generateContent"]},
            ]
        },
    )

    assert await adapter.list_models() == ["gemini-3-pro-image-preview"]
