"""Gemini facade — availability check plus the single generate boundary.

Every provider-side failure leaving this module is already classified into
the analyzer taxonomy, so callers never inspect SDK or transport exceptions.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from google import genai
from google.genai import types

from .config import get_config
from .errors import AnalyzerError, InvalidResponseError, classify_exception
from .media import validate_video_path
from .request import AnalysisRequest, GenerationConfig

logger = logging.getLogger(__name__)

LARGE_FILE_THRESHOLD = 20 * 1024 * 1024  # 20 MB


async def _wait_for_active(
    client: genai.Client, file_name: str, *, timeout: float = 120, interval: float = 2.0
) -> None:
    """Poll the Files API until *file_name* is ACTIVE.

    Raises:
        RuntimeError: If the file enters FAILED state.
        TimeoutError: If the file doesn't become ACTIVE within timeout.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        info = await client.aio.files.get(name=file_name)
        if info.state == "ACTIVE":
            return
        if info.state == "FAILED":
            raise RuntimeError(f"File processing failed: {file_name}")
        if loop.time() > deadline:
            raise TimeoutError(f"File {file_name} not active after {timeout}s (state: {info.state})")
        await asyncio.sleep(interval)


async def _video_part(client: genai.Client, video: str, frame_rate: int) -> types.Part:
    """Inline bytes for small clips, a File API reference for large ones."""
    path, mime = validate_video_path(video)
    sampling = types.VideoMetadata(fps=frame_rate)

    if path.stat().st_size >= LARGE_FILE_THRESHOLD:
        uploaded = await client.aio.files.upload(
            file=path,
            config=types.UploadFileConfig(mime_type=mime),
        )
        logger.info("Uploaded %s -> %s", path.name, uploaded.uri)
        await _wait_for_active(client, uploaded.name)
        return types.Part(
            file_data=types.FileData(file_uri=uploaded.uri, mime_type=mime),
            video_metadata=sampling,
        )

    data = await asyncio.to_thread(Path.read_bytes, path)
    return types.Part(
        inline_data=types.Blob(data=data, mime_type=mime),
        video_metadata=sampling,
    )


def _content_config(config: GenerationConfig) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=config.temperature,
        top_k=config.top_k,
        top_p=config.top_p,
        max_output_tokens=config.max_output_tokens,
        response_mime_type=config.response_mime_type,
        response_json_schema=config.response_schema or None,
    )


def _response_text(response: types.GenerateContentResponse) -> str:
    """Join user-visible text parts, dropping thought parts."""
    candidates = response.candidates or []
    parts = candidates[0].content.parts if candidates and candidates[0].content else None
    texts = [p.text for p in parts or [] if p.text and not getattr(p, "thought", False)]
    return "\n".join(texts) if texts else (response.text or "")


class GeminiFacade:
    """Process-wide Gemini client pool (one client per API key)."""

    _clients: dict[str, genai.Client] = {}

    @classmethod
    def is_available(cls) -> bool:
        """True when an API key is configured. Makes no network call."""
        return bool(get_config().gemini_api_key)

    @classmethod
    def get(cls, api_key: str | None = None) -> genai.Client:
        """Return (or create) the shared client for *api_key*."""
        cfg = get_config()
        key = api_key or cfg.gemini_api_key
        if not key:
            raise ValueError("No Gemini API key — set GEMINI_API_KEY or pass api_key explicitly")
        if key not in cls._clients:
            cls._clients[key] = genai.Client(
                api_key=key,
                http_options=types.HttpOptions(timeout=int(cfg.request_timeout * 1000)),
            )
            logger.info("Created Gemini client (key …%s)", key[-4:])
        return cls._clients[key]

    @classmethod
    async def generate(cls, request: AnalysisRequest) -> str:
        """Send *request* once and return the raw response text.

        Raises:
            AnalyzerError: Classified provider, transport or local file failure.
        """
        client = cls.get()
        try:
            parts = [await _video_part(client, video, request.frame_rate) for video in request.videos]
            parts.append(types.Part(text=request.prompt))
            response = await client.aio.models.generate_content(
                model=get_config().model,
                contents=types.Content(role="user", parts=parts),
                config=_content_config(request.generation_config),
            )
        except AnalyzerError:
            raise
        except Exception as exc:
            classified = classify_exception(exc)
            logger.warning("Gemini request failed (%s): %s", classified.kind.value, exc)
            raise classified from exc

        text = _response_text(response)
        if not text.strip():
            raise InvalidResponseError("The AI returned an empty response.")
        return text

    @classmethod
    async def close_all(cls) -> int:
        """Shut down all shared clients. Returns count closed."""
        count = 0
        for client in list(cls._clients.values()):
            try:
                await client.aio.aclose()
            except Exception:
                logger.debug("Async client close failed", exc_info=True)
            count += 1
        cls._clients.clear()
        logger.info("Closed %d Gemini client(s)", count)
        return count
