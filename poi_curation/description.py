"""Landmark description generation with a safe no-op fallback.

This module never hard-fails when GEMINI_API_KEY is missing or the model call
errors. Callers receive a structured status; only ASCII-safe text is ever
embedded in a prompt.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

import requests

from . import config
from .transliterate import to_ascii_safe

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_SKIPPED_NO_API_KEY = "skipped_no_api_key"
STATUS_SKIPPED_NO_SAFE_NAME = "skipped_no_safe_name"


@dataclass(frozen=True)
class ModelResult:
    status: str
    text: str
    model: str
    error: Optional[str] = None


class BaseTextModel:
    def generate_text(self, prompt_text: str, instructions: Optional[str] = None) -> ModelResult:
        raise NotImplementedError


class NoopTextModel(BaseTextModel):
    def __init__(self, reason: str = STATUS_SKIPPED_NO_API_KEY) -> None:
        self.reason = reason

    def generate_text(self, prompt_text: str, instructions: Optional[str] = None) -> ModelResult:
        return ModelResult(status=self.reason, text="", model="noop")


class GeminiTextModel(BaseTextModel):
    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or config.DEFAULT_TEXT_MODEL
        self.timeout_seconds = timeout_seconds or config.TEXT_MODEL_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> BaseTextModel:
        api_key = os.environ.get("GEMINI_API_KEY")
        if not api_key:
            return NoopTextModel(STATUS_SKIPPED_NO_API_KEY)
        model = os.environ.get("GEMINI_MODEL", config.DEFAULT_TEXT_MODEL)
        return cls(api_key=api_key, model=model)

    def _redact(self, text: str) -> str:
        if not text:
            return text
        redacted = text.replace(self.api_key, "[REDACTED]")
        return re.sub(r"(key=)[^&\s()]+", r"\1[REDACTED]", redacted)

    def generate_text(self, prompt_text: str, instructions: Optional[str] = None) -> ModelResult:
        url = f"{config.GEMINI_API_URL_TEMPLATE.format(model=self.model)}?key={self.api_key}"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt_text}]}],
            "generationConfig": {"temperature": 0.7},
        }
        if instructions:
            payload["systemInstruction"] = {"parts": [{"text": instructions}]}
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            return ModelResult("request_error", "", self.model, self._redact(f"request_error: {exc}"))
        if resp.status_code >= 400:
            return ModelResult("http_error", "", self.model, f"http_error: {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            return ModelResult("invalid_response", "", self.model, f"non_json_response: {exc}")

        candidates = data.get("candidates") or []
        if not candidates:
            return ModelResult("invalid_response", "", self.model, "no_candidates")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts = [p.get("text") for p in parts if isinstance(p.get("text"), str)]
        if not texts:
            return ModelResult("invalid_response", "", self.model, "missing_text_part")
        return ModelResult(STATUS_OK, "".join(texts).strip(), self.model)


def first_sentence(text: str) -> str:
    full = (text or "").strip()
    dot = full.find(".")
    if dot == -1:
        return full
    return full[: dot + 1].strip()


class DescriptionGenerator:
    def __init__(self, name: str, model: Optional[BaseTextModel] = None) -> None:
        self.name = (name or "").strip()
        self.model = model if model is not None else GeminiTextModel.from_env()
        self.description: Optional[str] = None
        self.short_description: Optional[str] = None
        self.status: Optional[str] = None
        self.error: Optional[str] = None

    def build_prompt(self) -> Optional[str]:
        safe_name = to_ascii_safe(self.name)
        if not safe_name:
            return None
        return config.DESCRIPTION_PROMPT_TEMPLATE.format(name=safe_name)

    def generate(self) -> Optional[str]:
        prompt = self.build_prompt()
        if prompt is None:
            self.status = STATUS_SKIPPED_NO_SAFE_NAME
            logger.info("Description skipped: no ASCII-safe form of %r", self.name)
            return None

        result = self.model.generate_text(prompt, instructions=config.DESCRIPTION_INSTRUCTIONS)
        self.status = result.status
        self.error = result.error
        if result.status != STATUS_OK:
            logger.warning("Description generation %s: %s", result.status, result.error or "")
            return None

        safe = to_ascii_safe(result.text)
        self.description = safe if safe else result.text
        self.short_description = first_sentence(self.description)
        return self.description
