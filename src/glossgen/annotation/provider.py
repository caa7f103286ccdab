"""Chat-completions client that asks the provider for per-line glosses."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import re
from typing import Any

from glossgen.annotation.config import AnnotationSettings
from glossgen.annotation.request import build_annotation_request, build_messages
from glossgen.content.models import ManifestItem, ParsedContent

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*\s*\n?(.*?)\n?```$", re.DOTALL)


@dataclass(slots=True)
class AnnotationRequestError(RuntimeError):
    """Domain error raised when the provider cannot be reached or refuses a request."""

    model: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (model={self.model})"


def _build_default_client(settings: AnnotationSettings) -> Any:
    try:
        from openai import OpenAI
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise AnnotationRequestError(
            model=settings.model,
            message=f"OpenAI SDK unavailable for annotation client: {exc}",
        ) from exc

    return OpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
        max_retries=0,
    )


def _to_plain(value: Any) -> Any:
    """Turn SDK response objects into dicts and lists."""

    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return dump()
    if isinstance(value, dict):
        return {str(key): _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if hasattr(value, "__dict__"):
        return {key: _to_plain(item) for key, item in vars(value).items() if not key.startswith("_")}
    return value


def _message_content(response: Any) -> str | None:
    choices = getattr(response, "choices", None)
    if choices is None and isinstance(response, dict):
        choices = response.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    first = choices[0]
    message = getattr(first, "message", None)
    content = getattr(message, "content", None) if message is not None else None
    if content is None and isinstance(first, dict):
        message_dict = first.get("message", {})
        if isinstance(message_dict, dict):
            content = message_dict.get("content")

    if isinstance(content, list):
        content = "".join(str(part.get("text", "")) for part in content if isinstance(part, dict))
    if not isinstance(content, str) or not content.strip():
        return None
    return content.strip()


def decode_reply(response: Any) -> Any:
    """Return the JSON object the model wrote, or the raw response as a fallback."""

    content = _message_content(response)
    if content is None:
        logger.warning("Provider reply has no message content; normalizing the raw response")
        return _to_plain(response)

    fenced = _CODE_FENCE_RE.match(content)
    if fenced:
        content = fenced.group(1).strip()

    try:
        return json.loads(content)
    except (ValueError, RecursionError) as exc:
        logger.warning("Provider reply is not valid JSON (%s); normalizing the raw response", exc)
        return _to_plain(response)


class ChatAnnotator:
    """Provider wrapper: one request per document, no retries."""

    def __init__(
        self,
        settings: AnnotationSettings,
        *,
        client: Any | None = None,
        temperature: float = 0.2,
    ) -> None:
        self._settings = settings
        self._client = client or _build_default_client(settings)
        self._temperature = temperature

    @property
    def model(self) -> str:
        return self._settings.model

    def annotate(self, item: ManifestItem, content: ParsedContent) -> Any:
        """Request glosses for *content* and return the untrusted payload."""

        request = build_annotation_request(item, content)
        try:
            response = self._client.chat.completions.create(
                model=self._settings.model,
                messages=build_messages(request),
                temperature=self._temperature,
                response_format={"type": "json_object"},
            )
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            prefix = f"HTTP {status_code}: " if status_code is not None else ""
            raise AnnotationRequestError(
                model=self._settings.model,
                message=f"Annotation request failed for {item.file}: {prefix}{str(exc)[:180]}",
            ) from exc

        return decode_reply(response)
