"""Runtime configuration for the annotation provider."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"
DEFAULT_TIMEOUT_SECONDS = 120.0

_CHAT_COMPLETIONS_SUFFIX = "/chat/completions"


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.001) -> float:
    try:
        value = float(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be a number") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _pick(override: str | None, source: Mapping[str, str], name: str, default: str = "") -> str:
    if override is not None and override.strip():
        return override.strip()
    return source.get(name, default).strip()


@dataclass(frozen=True, slots=True)
class AnnotationSettings:
    """Validated provider settings, built once per run and passed explicitly."""

    api_key: str
    model: str = DEFAULT_DEEPSEEK_MODEL
    base_url: str = DEFAULT_DEEPSEEK_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        api_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
    ) -> "AnnotationSettings":
        """Resolve settings from keyword overrides, then the environment."""

        source: Mapping[str, str] = os.environ if environ is None else environ

        key = _pick(api_key, source, "DEEPSEEK_API_KEY")
        model_name = _pick(model, source, "DEEPSEEK_MODEL", DEFAULT_DEEPSEEK_MODEL)
        base_url = _pick(api_url, source, "DEEPSEEK_API_URL", DEFAULT_DEEPSEEK_BASE_URL)
        timeout_raw = source.get("DEEPSEEK_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)).strip()

        missing: list[str] = []
        if not key:
            missing.append("DEEPSEEK_API_KEY")
        if not model_name:
            missing.append("DEEPSEEK_MODEL")

        if missing:
            missing_text = ", ".join(missing)
            raise ValueError(f"Missing required annotation settings: {missing_text}")

        if not base_url:
            raise ValueError("DEEPSEEK_API_URL cannot be empty")
        if not (base_url.startswith("http://") or base_url.startswith("https://")):
            raise ValueError("DEEPSEEK_API_URL must start with http:// or https://")
        if not timeout_raw:
            raise ValueError("DEEPSEEK_TIMEOUT_SECONDS cannot be empty")

        timeout_seconds = _parse_positive_float(
            name="DEEPSEEK_TIMEOUT_SECONDS",
            raw_value=timeout_raw,
            minimum=1.0,
        )

        base_url = base_url.rstrip("/")
        if base_url.endswith(_CHAT_COMPLETIONS_SUFFIX):
            base_url = base_url[: -len(_CHAT_COMPLETIONS_SUFFIX)]

        return cls(api_key=key, model=model_name, base_url=base_url, timeout_seconds=timeout_seconds)
