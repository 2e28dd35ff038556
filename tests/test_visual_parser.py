import json
from unittest.mock import MagicMock

import pytest

from recipe_importer.parsers import gemini_vision, visual_parser
from recipe_importer.parsers.gemini_vision import GeminiVisionService
from recipe_importer.parsers.visual_parser import (
    VisionService,
    VisualParser,
    build_prompt,
    calculate_overall_confidence,
    parse_reply,
)
from recipe_importer.models.visual import FieldConfidence

IMAGE = b"\xff\xd8\xff\xe0fake-jpeg"


class StubVisionService(VisionService):
    def __init__(self, reply="", enabled=True, error=None):
        self.reply = reply
        self.enabled = enabled
        self.error = error
        self.calls = []

    def is_enabled(self):
        return self.enabled

    def analyze_image(self, prompt, image, mime_type):
        self.calls.append((prompt, image, mime_type))
        if self.error is not None:
            raise self.error
        return self.reply


def reply(**data):
    return "```json\n" + json.dumps(data) + "\n```"


def test_parse_from_image():
    service = StubVisionService(reply(
        title="Banana Bread", titleConfidence=0.95,
        ingredients=["3 bananas", "2 cups flour"], ingredientsConfidence=0.9,
        instructions=["Mash.", "Bake."], instructionsConfidence=0.8,
        prepTime="PT15M", prepTimeConfidence=0.9,
        cookTime="PT1H", cookTimeConfidence=0.9,
        servings=8, servingsConfidence=0.9,
        rawText="Banana Bread ...",
    ))
    result = VisualParser(service).parse_from_image(IMAGE, "image/jpeg", language="English")

    assert result.success
    assert result.recipe.title == "Banana Bread"
    assert result.recipe.prep_time.minutes == 15
    assert result.recipe.cook_time.minutes == 60
    assert result.recipe.servings == 8
    assert result.raw_text == "Banana Bread ..."
    assert result.warnings is None
    assert result.errors is None
    expected = (0.95 * 0.15 + 0.9 * 0.35 + 0.8 * 0.35 + 0.9 * 0.05 * 3) / 1.0
    assert result.confidence == pytest.approx(expected)

    prompt, image, mime_type = service.calls[0]
    assert "The text may be in English." in prompt
    assert image == IMAGE
    assert mime_type == "image/jpeg"


def test_missing_confidence_defaults():
    service = StubVisionService(reply(title="Soup", ingredients=["1 onion"]))
    result = VisualParser(service).parse_from_image(IMAGE, "image/png")

    assert result.field_confidence.title == 0.5
    assert result.field_confidence.ingredients == 0.5
    assert result.field_confidence.instructions == 0
    assert result.confidence == pytest.approx(0.5)


def test_low_confidence_warnings():
    service = StubVisionService(reply(
        title="Scribbles", titleConfidence=0.4,
        ingredients=["1 egg"], ingredientsConfidence=0.9,
        servings=2, servingsConfidence=0.65,
    ))
    result = VisualParser(service).parse_from_image(IMAGE, "image/heic")

    assert result.warnings == [
        "Title extraction has low confidence (40%)",
        "Servings extraction has low confidence (65%)",
    ]


def test_threshold_controls_warnings():
    service = StubVisionService(reply(title="Soup", titleConfidence=0.6))
    parser = VisualParser(service)
    parser.set_confidence_threshold(0.5)
    assert parser.parse_from_image(IMAGE, "image/jpeg").warnings is None


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_threshold_must_be_in_range(threshold):
    parser = VisualParser(StubVisionService())
    with pytest.raises(ValueError):
        parser.set_confidence_threshold(threshold)
    assert parser.confidence_threshold == 0.7


def test_unavailable_service():
    service = StubVisionService(enabled=False)
    result = VisualParser(service).parse_from_image(IMAGE, "image/jpeg")
    assert not result.success
    assert result.errors == ["AI features are not enabled. Visual parsing requires AI to be configured."]
    assert service.calls == []


def test_unsupported_format():
    result = VisualParser(StubVisionService()).parse_from_image(IMAGE, "image/gif")
    assert not result.success
    assert "image/gif" in result.errors[0]


def test_provider_error_is_reported():
    service = StubVisionService(error=RuntimeError("rate limited"))
    result = VisualParser(service).parse_from_image(IMAGE, "image/jpeg")
    assert not result.success
    assert result.errors == ["rate limited"]


def test_reply_without_json():
    result = VisualParser(StubVisionService("I cannot read this.")).parse_from_image(IMAGE, "image/jpeg")
    assert not result.success
    assert "No JSON found" in result.errors[0]


def test_reply_without_recipe_fields():
    result = VisualParser(StubVisionService(reply(rawText="blurry"))).parse_from_image(IMAGE, "image/jpeg")
    assert not result.success
    assert result.recipe is None
    assert result.raw_text == "blurry"
    assert result.errors == ["Could not extract recipe data from image"]


def test_supported_formats():
    parser = VisualParser(StubVisionService())
    assert parser.supported_formats() == ["image/jpeg", "image/png", "image/heic", "image/heif", "image/tiff"]
    assert parser.is_supported_format("image/tiff")
    assert not parser.is_supported_format("image/webp")


def test_overall_confidence_ignores_missing_fields():
    assert calculate_overall_confidence(FieldConfidence()) == 0
    assert calculate_overall_confidence(FieldConfidence(ingredients=0.8)) == pytest.approx(0.8)


def test_parse_reply():
    assert parse_reply('Here you go: {"title": "Soup"} Enjoy!') == {"title": "Soup"}
    with pytest.raises(ValueError):
        parse_reply("{broken")


def test_build_prompt_hints():
    assert "This is a handwritten recipe." in build_prompt(recipe_type="handwritten")
    assert "handwritten, printed, or screenshot" in build_prompt()


def test_gemini_vision_service(monkeypatch):
    model = MagicMock()
    model.generate_content.return_value = MagicMock(text='{"title": "Soup"}')
    configure = MagicMock()
    monkeypatch.setattr(gemini_vision.genai, "configure", configure)
    monkeypatch.setattr(gemini_vision.genai, "GenerativeModel", MagicMock(return_value=model))

    service = GeminiVisionService(api_key="secret", model="gemini-2.5-flash")
    assert service.analyze_image("prompt", IMAGE, "image/png") == '{"title": "Soup"}'

    configure.assert_called_once_with(api_key="secret")
    model.generate_content.assert_called_once_with(
        ["prompt", {"mime_type": "image/png", "data": IMAGE}])


def test_gemini_vision_service_disabled():
    service = GeminiVisionService()
    assert not service.is_enabled()
    with pytest.raises(RuntimeError):
        service.analyze_image("prompt", IMAGE, "image/png")


def test_non_finite_confidence_counts_as_missing():
    service = StubVisionService(reply(
        title="Soup", titleConfidence=float("nan"),
        ingredients=["1 cup water"], ingredientsConfidence=float("inf"),
        servings=float("nan"),
    ))
    result = VisualParser(service).parse_from_image(IMAGE, "image/jpeg")

    assert result.success
    assert result.field_confidence.title == 0.5
    assert result.field_confidence.ingredients == 0.5
    assert result.recipe.servings is None


def test_invalid_reply_data_is_reported(monkeypatch):
    def broken(data):
        raise ValueError("bad recipe data")

    monkeypatch.setattr(visual_parser, "_build_recipe", broken)
    service = StubVisionService(reply(title="Soup"))

    result = VisualParser(service).parse_from_image(IMAGE, "image/jpeg")

    assert not result.success
    assert result.errors == ["bad recipe data"]
