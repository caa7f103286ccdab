from __future__ import annotations

import pytest

from glossgen.annotation.config import (
    DEFAULT_DEEPSEEK_BASE_URL,
    DEFAULT_DEEPSEEK_MODEL,
    AnnotationSettings,
)


def test_settings_load_from_env_with_defaults() -> None:
    settings = AnnotationSettings.from_env({"DEEPSEEK_API_KEY": "sk-test"})

    assert settings.api_key == "sk-test"
    assert settings.model == DEFAULT_DEEPSEEK_MODEL
    assert settings.base_url == DEFAULT_DEEPSEEK_BASE_URL
    assert settings.timeout_seconds == 120.0


def test_settings_missing_key_fails_fast() -> None:
    with pytest.raises(ValueError, match="DEEPSEEK_API_KEY"):
        AnnotationSettings.from_env({"DEEPSEEK_MODEL": "deepseek-chat"})


def test_overrides_take_precedence_over_environment() -> None:
    settings = AnnotationSettings.from_env(
        {"DEEPSEEK_API_KEY": "sk-env", "DEEPSEEK_MODEL": "env-model"},
        api_key="sk-cli",
        model="cli-model",
        api_url="https://example.test/v1/",
    )

    assert settings.api_key == "sk-cli"
    assert settings.model == "cli-model"
    assert settings.base_url == "https://example.test/v1"


def test_full_endpoint_url_is_reduced_to_base() -> None:
    settings = AnnotationSettings.from_env(
        {
            "DEEPSEEK_API_KEY": "sk-test",
            "DEEPSEEK_API_URL": "https://api.deepseek.com/v1/chat/completions",
        }
    )

    assert settings.base_url == "https://api.deepseek.com/v1"


def test_settings_validate_url_and_timeout() -> None:
    with pytest.raises(ValueError, match="DEEPSEEK_API_URL"):
        AnnotationSettings.from_env({"DEEPSEEK_API_KEY": "sk-test", "DEEPSEEK_API_URL": "api.deepseek.com"})

    with pytest.raises(ValueError, match="DEEPSEEK_TIMEOUT_SECONDS"):
        AnnotationSettings.from_env({"DEEPSEEK_API_KEY": "sk-test", "DEEPSEEK_TIMEOUT_SECONDS": "0"})

    with pytest.raises(ValueError, match="DEEPSEEK_TIMEOUT_SECONDS"):
        AnnotationSettings.from_env({"DEEPSEEK_API_KEY": "sk-test", "DEEPSEEK_TIMEOUT_SECONDS": "soon"})
