import base64
from typing import Any

import httpx
import openai

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.exceptions import AnalysisSizeLimitError, AnalysisTransportError
from docanalyzer.extraction.models import BinaryDocument
from docanalyzer.logging.logger import Log

_GENERIC_FAILURE = "An unknown error occurred while communicating with the AI provider"
_SIZE_LIMIT_MARKERS = (
    "context_length_exceeded",
    "maximum context length",
    "too many tokens",
    "request too large",
)


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis AI client adapter built on the OpenAI-compatible chat API.

    Retries are disabled: a failed call fails the analysis and the caller
    decides whether to run it again.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    async def generate_content(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        attachment: BinaryDocument | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        extra: dict[str, Any] = {}
        if json_schema is not None:
            extra["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "document_analysis",
                    "strict": True,
                    "schema": json_schema,
                },
            }
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {"role": "user", "content": _build_content(prompt, attachment)},
                ],
                **extra,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisTransportError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIStatusError as exc:
            if _is_size_limit_error(exc):
                raise AnalysisSizeLimitError(
                    f"AI provider rejected the input as too large: {exc.message}"
                ) from exc
            raise AnalysisTransportError(
                f"AI provider API error: {exc.message or _GENERIC_FAILURE}"
            ) from exc
        except openai.APIError as exc:
            raise AnalysisTransportError(
                f"AI provider API error: {exc.message or _GENERIC_FAILURE}"
            ) from exc

        if not response.choices:
            raise AnalysisTransportError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            Log.warning("AI returned a response without text content")
            return ""
        return content


def _build_content(prompt: str, attachment: BinaryDocument | None) -> str | list[dict[str, Any]]:
    if attachment is None:
        return prompt
    encoded = base64.b64encode(attachment.data).decode("ascii")
    data_url = f"data:{attachment.media_type};base64,{encoded}"
    if attachment.is_image:
        part: dict[str, Any] = {"type": "image_url", "image_url": {"url": data_url}}
    else:
        part = {"type": "file", "file": {"filename": "attachment", "file_data": data_url}}
    return [{"type": "text", "text": prompt}, part]


def _is_size_limit_error(exc: openai.APIStatusError) -> bool:
    if exc.status_code == 413:
        return True
    text = f"{exc.code or ''} {exc.message}".lower()
    return any(marker in text for marker in _SIZE_LIMIT_MARKERS)
