"""Generative-AI consultation and news client (Google Gen AI SDK).

All calls are user-triggered. Any failure (missing key, SDK or transport
error, or a response of unexpected shape) is raised as AssistantError;
callers turn it into a fixed user-facing message.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Optional

from google import genai
from google.genai import errors, types

from .config import (
    API_KEY_ENVS,
    CONSULT_FAILURE_MESSAGE,
    CONSULT_MODEL,
    CONSULT_TEMPERATURE,
    CONSULT_TIMEOUT,
    NEWS_EMPTY_MESSAGE,
    NEWS_MODEL,
    NEWS_TIMEOUT,
)

logger = logging.getLogger(__name__)

_NO_CONTEXT_NOTICE = "현재 업로드된 추가 파일 지침이 없습니다. 기존 학습 데이터를 바탕으로 답변하세요."

_SYSTEM_INSTRUCTION = """\
당신은 NH농협의 '여신 파트너' AI 컨설턴트입니다.

[중요 지침]
1. 사용자가 업로드한 지침 파일 내용이 있다면, 당신이 기존에 알고 있던 지식보다 해당 파일의 내용을 최우선 순위(Source of Truth)로 삼으세요.
2. 답변 시작은 항상 "NH 여신 파트너로서 전문적인 상담을 도와드립니다."로 하세요.
3. 수식은 LaTeX를 사용하여 가독성을 높이세요.
4. 불필요한 마크다운 기호(#, *)를 남발하지 말고, 전문적인 문어체와 가독성 있는 단락 구분을 사용하세요.
5. 지역별 규제(투기과열지구 등)와 농협 내부 지침(부동산/건설업 할증 등)을 명확히 설명하세요.

[업로드된 최신 지침 파일 컨텍스트]
{context}

본 상담 내용은 참고용이며, 반드시 통합여신시스템 및 최신 규정집을 통해 최종 확인하시기 바랍니다.
"""

_NEWS_PROMPT = (
    "최근 7일간의 '부동산 대출 규제', 'LTV DSR 정책', '농협 여신 관련 뉴스' 5개를 "
    "제목과 짧은 요약(3줄 이내)으로 정리해줘. 가독성을 위해 불필요한 특수문자는 제거해."
)

# Shape errors a malformed response can surface while it is being read.
_PARSE_ERRORS = (AttributeError, TypeError, KeyError, IndexError, ValueError)


class AssistantError(Exception):
    """Raised when the generative-AI service cannot produce an answer."""


def _api_key() -> str:
    for name in API_KEY_ENVS:
        value = os.environ.get(name)
        if value:
            return value
    raise AssistantError(
        f"No API key configured. Set {' or '.join(API_KEY_ENVS)}."
    )


def _client(timeout: int) -> genai.Client:
    """A fresh SDK client; the timeout is in seconds."""
    return genai.Client(
        api_key=_api_key(),
        http_options=types.HttpOptions(timeout=timeout * 1000),
    )


def _generate(model: str, prompt: str, *, timeout: int,
              system_instruction: Optional[str] = None,
              temperature: Optional[float] = None) -> Any:
    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=temperature,
        tools=[types.Tool(google_search=types.GoogleSearch())],
    )
    client = _client(timeout)
    try:
        return client.models.generate_content(model=model, contents=prompt, config=config)
    except errors.APIError as exc:
        raise AssistantError(f"Generative AI request failed ({exc.code}): {exc.message}") from exc
    except Exception as exc:
        # Transport failures surface as the HTTP client's own exception types.
        raise AssistantError(f"Generative AI request failed: {exc}") from exc


def response_text(response: Any) -> str:
    """The concatenated answer text; "" when the response carries none."""
    text = response.text
    if text is None:
        return ""
    if not isinstance(text, str):
        raise AssistantError("Generative AI returned a non-text answer.")
    return text


def grounding_urls(response: Any) -> list[str]:
    """Web source URIs from the first candidate's grounding metadata."""
    candidates = getattr(response, "candidates", None)
    if not isinstance(candidates, list) or not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None)
    if not isinstance(chunks, list):
        return []
    urls = []
    for chunk in chunks:
        uri = getattr(getattr(chunk, "web", None), "uri", None)
        if isinstance(uri, str) and uri:
            urls.append(uri)
    return urls


def consult_loan(prompt: str, extra_context: str = "") -> str:
    """Ask the loan consultant; grounding links are appended when present."""
    instruction = _SYSTEM_INSTRUCTION.format(context=extra_context or _NO_CONTEXT_NOTICE)
    response = _generate(
        CONSULT_MODEL, prompt,
        timeout=CONSULT_TIMEOUT,
        system_instruction=instruction,
        temperature=CONSULT_TEMPERATURE,
    )
    try:
        text = response_text(response)
        urls = grounding_urls(response)
    except _PARSE_ERRORS as exc:
        raise AssistantError(f"Failed to parse Generative AI response: {exc}") from exc

    if urls:
        links = "\n".join(f"- {url}" for url in urls)
        text += f"\n\n관련 참고 링크:\n{links}"
    return text


def fetch_latest_news() -> str:
    """Fetch a short digest of recent loan-regulation news as free-form text."""
    response = _generate(NEWS_MODEL, _NEWS_PROMPT, timeout=NEWS_TIMEOUT)
    try:
        text = response_text(response)
    except _PARSE_ERRORS as exc:
        raise AssistantError(f"Failed to parse Generative AI response: {exc}") from exc
    return text or NEWS_EMPTY_MESSAGE


def consult_or_fallback(prompt: str, extra_context: str = "") -> str:
    try:
        return consult_loan(prompt, extra_context)
    except AssistantError as exc:
        logger.warning("Consultation failed: %s", exc)
        return CONSULT_FAILURE_MESSAGE
