"""Gemini requests behind the dashboard.

Both entry points are total: failures are logged and converted into a
fallback value (a fixed essence, or ``None`` for images) so callers never
see an exception from the remote model.
"""

from __future__ import annotations

import base64
import json
import logging
import time

from google import genai
from google.genai import types
from google.genai.types import Modality

from config import load_settings
from models import MorningEssence, WordOfDay
from prompts import ESSENCE_PROMPT, IMAGE_STYLE_PROMPT, UNKNOWN_LOCATION

logger = logging.getLogger(__name__)

IMAGE_ASPECT_RATIO = "1:1"
DATA_URI_PREFIX = "data:image/png;base64,"

FALLBACK_ESSENCE = MorningEssence(
    greeting="Bão dia! Que seu dia seja iluminado.",
    quote="A jornada de mil milhas começa com um único passo.",
    word_of_day=WordOfDay(
        word="Resiliência",
        meaning="Capacidade de se adaptar às mudanças.",
    ),
    tip="Beba um copo de água ao acordar.",
)

ESSENCE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "greeting": types.Schema(type=types.Type.STRING),
        "quote": types.Schema(type=types.Type.STRING),
        "wordOfDay": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "word": types.Schema(type=types.Type.STRING),
                "meaning": types.Schema(type=types.Type.STRING),
            },
            required=["word", "meaning"],
        ),
        "tip": types.Schema(type=types.Type.STRING),
    },
    required=["greeting", "quote", "wordOfDay", "tip"],
)

_client = None


def get_client():
    """Return the shared Gemini client, creating it on first use."""
    global _client
    if _client is None:
        settings = load_settings()
        if not settings.api_key:
            raise RuntimeError("GEMINI_API_KEY is not set")
        _client = genai.Client(
            api_key=settings.api_key,
            http_options=types.HttpOptions(timeout=settings.http_timeout_ms),
        )
    return _client


def build_essence_prompt(location=None):
    location = (location or "").strip()
    return ESSENCE_PROMPT.format(location=location or UNKNOWN_LOCATION)


def build_essence_config():
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=ESSENCE_SCHEMA,
    )


def build_image_prompt(prompt):
    return IMAGE_STYLE_PROMPT.format(prompt=prompt.strip())


def build_image_config():
    return types.GenerateContentConfig(
        response_modalities=[Modality.TEXT, Modality.IMAGE],
        image_config=types.ImageConfig(aspect_ratio=IMAGE_ASPECT_RATIO),
    )


def parse_essence(text):
    """Parse the model's reply text into a MorningEssence.

    Raises ValueError on empty, malformed, or schema-violating replies.
    """
    if not text:
        raise ValueError("Empty response from model")
    return MorningEssence.from_dict(json.loads(text))


def get_morning_essence(location=None, client=None, model=None):
    """Ask the text model for today's essence; never raises."""
    try:
        model = model or load_settings().text_model
        client = client or get_client()
        start = time.time()
        response = client.models.generate_content(
            model=model,
            contents=build_essence_prompt(location),
            config=build_essence_config(),
        )
        essence = parse_essence(response.text)
        logger.info("Essence generated by %s in %.1fs", model, time.time() - start)
        return essence
    except Exception:
        logger.exception("Could not get morning essence from %s, using fallback", model)
        return FALLBACK_ESSENCE


def extract_image_data_uri(response):
    """Return the first inline image of the first candidate as a data URI."""
    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return None
    for part in candidates[0].content.parts or []:
        if part.inline_data and part.inline_data.data:
            b64 = base64.b64encode(part.inline_data.data).decode("utf-8")
            return f"{DATA_URI_PREFIX}{b64}"
    return None


def generate_image(prompt, client=None, model=None):
    """Ask the image model for art matching ``prompt``; returns a data URI or None."""
    try:
        model = model or load_settings().image_model
        client = client or get_client()
        start = time.time()
        response = client.models.generate_content(
            model=model,
            contents=build_image_prompt(prompt),
            config=build_image_config(),
        )
        image = extract_image_data_uri(response)
    except Exception:
        logger.exception("Image generation with %s failed", model)
        return None

    if image is None:
        logger.warning("Model %s did not return an image", model)
    else:
        logger.info("Image generated by %s in %.1fs", model, time.time() - start)
    return image
