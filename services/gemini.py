# services/gemini.py
import asyncio
import functools
import logging

import httpx
from google import genai
from google.genai import types, errors as gerrors
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.db import GenerationFailure

_LOG = logging.getLogger(__name__)


class GenerationTransportError(RuntimeError):
    """The generation call itself failed (HTTP status, network, timeout)."""


# ───────────── API Key & Client ─────────────
@functools.lru_cache(maxsize=1)
def _client() -> genai.Client:
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY not set in environment")
    return genai.Client(
        api_key=settings.gemini_api_key,
        http_options=types.HttpOptions(timeout=int(settings.generation_timeout_s * 1000)),
    )


# ───────────── Generation (async, single attempt) ─────────────
async def generate(
    prompt: str,
    temperature: float | None = None,
    max_output_tokens: int | None = None,
) -> str:
    """Run one completion and return the raw text. No retries here."""
    client = _client()
    config = types.GenerateContentConfig(
        temperature=settings.generation_temperature if temperature is None else temperature,
        max_output_tokens=(
            settings.generation_max_output_tokens
            if max_output_tokens is None else max_output_tokens
        ),
    )
    try:
        resp = await asyncio.wait_for(
            client.aio.models.generate_content(
                model=settings.gemini_model,
                contents=[prompt],
                config=config,
            ),
            timeout=settings.generation_timeout_s,
        )
    except gerrors.APIError as e:
        raise GenerationTransportError(f"Gemini API error {e.code}: {e.message}") from e
    except (httpx.HTTPError, asyncio.TimeoutError) as e:
        raise GenerationTransportError(f"Gemini transport failure: {e!r}") from e
    return resp.text or ""


# ───────────── Error Logging ─────────────
async def log_failure_to_db(
    db: AsyncSession,
    canteen_id: int,
    attempt: int,
    stage: str,
    error: str,
    raw_input: str = "",
    raw_output: str = "",
) -> None:
    """
    Persist a failed generation attempt to the database.
    """
    failure = GenerationFailure(
        canteen_id=canteen_id,
        attempt=attempt,
        stage=stage,
        error_message=error,
        raw_input=raw_input,
        raw_output=raw_output,
    )
    db.add(failure)
    await db.commit()
