"""Shell command suggestions from an OpenAI-compatible chat completions API."""

from __future__ import annotations

import json
import logging
import os
import re
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_OPEN_AI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"

SUGGESTION_OVERRIDES: dict[str, list[str]] = {}
"""Canned suggestions keyed by query, returned instead of calling the API."""

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


class AiError(Exception):
    """Raised when suggestions cannot be obtained from the API."""


@dataclass
class OpenAiUsage:
    """Token accounting reported by the API for one request."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> OpenAiUsage:
        if not isinstance(data, dict):
            return cls()
        return cls(
            prompt_tokens=data.get("prompt_tokens") or 0,
            completion_tokens=data.get("completion_tokens") or 0,
            total_tokens=data.get("total_tokens") or 0,
        )


@dataclass
class AiSuggestionRequest:
    """A request for suggestions sent to the backend proxy."""

    device_id: str = ""
    user_id: str = ""
    query: str = ""
    number_completions: int = 0
    shell_name: str = ""
    os_name: str = ""
    model: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "device_id": self.device_id,
            "user_id": self.user_id,
            "query": self.query,
            "number_completions": self.number_completions,
            "shell_name": self.shell_name,
            "os_name": self.os_name,
            "model": self.model,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AiSuggestionRequest:
        return cls(
            device_id=data.get("device_id") or "",
            user_id=data.get("user_id") or "",
            query=data.get("query") or "",
            number_completions=data.get("number_completions") or 0,
            shell_name=data.get("shell_name") or "",
            os_name=data.get("os_name") or "",
            model=data.get("model") or "",
        )


@dataclass
class AiSuggestionResponse:
    """The backend proxy's reply carrying suggested commands."""

    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"suggestions": list(self.suggestions)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AiSuggestionResponse:
        return cls(suggestions=list(data.get("suggestions") or []))


def create_open_ai_request(
    query: str,
    shell_name: str,
    os_name: str,
    overridden_model: str,
    number_completions: int,
) -> dict[str, Any]:
    """Build the JSON body of a chat completions request."""
    os_name = os_name or "Linux"
    shell_name = shell_name or "bash"

    model = os.environ.get("OPENAI_API_MODEL") or DEFAULT_MODEL
    if overridden_model:
        model = overridden_model

    env_completions = os.environ.get("OPENAI_API_NUMBER_COMPLETIONS", "")
    if env_completions and _INTEGER_RE.fullmatch(env_completions):
        number_completions = int(env_completions)

    system_prompt = (
        "You are an expert programmer that loves to help people with writing shell commands. "
        "You always reply with just a shell command and no additional context, information, "
        "or formatting. Your replies will be directly executed in "
        + shell_name
        + " on "
        + os_name
        + ", so ensure that they are correct and do not contain anything other than a shell "
        "command."
    )
    system_prompt = os.environ.get("OPENAI_API_SYSTEM_PROMPT") or system_prompt

    return {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": query},
        ],
        "n": number_completions,
    }


def _post(api_endpoint: str, body: bytes, api_key: str) -> tuple[int, bytes]:
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = "Bearer " + api_key
    request = urllib.request.Request(api_endpoint, data=body, headers=headers, method="POST")
    try:
        with urllib.request.urlopen(request) as response:
            return response.status, response.read()
    except urllib.error.HTTPError as exc:
        try:
            return exc.code, exc.read()
        except OSError as read_exc:
            raise AiError(f"failed to read OpenAI API response: {read_exc}") from read_exc
        finally:
            exc.close()
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise AiError(f"failed to query OpenAI API: {exc}") from exc


def get_ai_suggestions_via_open_ai_api(
    api_endpoint: str,
    query: str,
    shell_name: str,
    os_name: str,
    overridden_model: str,
    number_completions: int,
) -> tuple[list[str], OpenAiUsage]:
    """Ask the API for shell commands matching ``query``.

    Returns the distinct suggestions in the order received and the usage report.
    """
    overridden = SUGGESTION_OVERRIDES.get(query)
    if overridden:
        return list(overridden), OpenAiUsage()
    logger.info("Running OpenAI query for %r", query)
    api_key = os.environ.get("OPENAI_API_KEY", "")
    if not api_key and api_endpoint == DEFAULT_OPEN_AI_ENDPOINT:
        raise AiError("OPENAI_API_KEY environment variable is not set")
    body = json.dumps(
        create_open_ai_request(query, shell_name, os_name, overridden_model, number_completions)
    ).encode("utf-8")
    status, body_text = _post(api_endpoint, body, api_key)
    if status == 429:
        raise AiError("received 429 error code from OpenAI (is your API key valid?)")
    try:
        parsed = json.loads(body_text)
    except ValueError as exc:
        raise AiError(f"failed to parse OpenAI API response={body_text!r}: {exc}") from exc
    if not isinstance(parsed, dict):
        raise AiError(f"failed to parse OpenAI API response={body_text!r}: not a JSON object")
    choices = parsed.get("choices") or []
    if not choices:
        raise AiError(
            f"OpenAI API returned zero choices, parsed resp={parsed!r}, "
            f"resp body={body_text!r}, resp.StatusCode={status}"
        )
    suggestions: list[str] = []
    for choice in choices:
        message = choice.get("message") if isinstance(choice, dict) else None
        content = (message or {}).get("content") or ""
        if content not in suggestions:
            suggestions.append(content)
    logger.info("For OpenAI query=%r ==> %r", query, suggestions)
    return suggestions, OpenAiUsage.from_dict(parsed.get("usage"))