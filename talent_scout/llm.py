"""
Talent Scout - hosted chat model client
Thin async client for the Anthropic Messages API with retry on transient errors.
"""
import logging
from typing import Any, Dict, List, Union

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from talent_scout import config
from talent_scout.errors import LLMError, ServiceNotConfigured
from talent_scout.security import strip_prompt_injection

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."

Content = Union[str, List[Dict[str, Any]]]


def _is_retryable(exc: BaseException) -> bool:
    # Client errors (bad key, malformed request) will not get better on retry
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, httpx.TransportError)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(1, 10),
    retry=retry_if_exception(_is_retryable),
    reraise=True,
)
async def _post_messages(payload: dict) -> dict:
    async with httpx.AsyncClient(timeout=config.AI_TIMEOUT_SECONDS) as client:
        response = await client.post(
            f"{config.ANTHROPIC_URL.rstrip('/')}/v1/messages",
            json=payload,
            headers={
                "x-api-key": config.ANTHROPIC_API_KEY,
                "anthropic-version": config.ANTHROPIC_VERSION,
                "content-type": "application/json",
            },
        )
        response.raise_for_status()
        return response.json()


def build_messages(history: List[dict], message: str, opening: str = "Hello.") -> List[Dict[str, Content]]:
    """Turn client-side chat history plus the new user message into API messages.

    Unknown roles and empty turns are dropped and user text is passed through
    ``strip_prompt_injection``.
    """
    messages: List[Dict[str, Content]] = []
    for turn in history or []:
        role = turn.get("role")
        content = (turn.get("content") or "").strip()
        if role not in ("user", "assistant") or not content:
            continue
        if role == "user":
            content = strip_prompt_injection(content)
        messages.append({"role": role, "content": content})

    messages.append({"role": "user", "content": strip_prompt_injection(message.strip())})

    # Conversations must open with a user turn
    if messages[0]["role"] == "assistant":
        messages.insert(0, {"role": "user", "content": opening})
    return messages


async def chat(
    messages: List[Dict[str, Content]],
    system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    temperature: float = 0.7,
    max_tokens: int = 2048,
) -> str:
    """Send a conversation to the model and return the text of its reply.

    ``messages`` alternate ``user``/``assistant`` roles; ``content`` is either a
    plain string or a list of content blocks (e.g. a PDF document plus text).
    """
    if not config.ANTHROPIC_API_KEY:
        raise ServiceNotConfigured("ANTHROPIC_API_KEY not configured")

    payload = {
        "model": config.AI_MODEL,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "system": system_prompt,
        "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
    }

    logger.info("[LLM] Sending request with %d message(s)", len(messages))
    try:
        data = await _post_messages(payload)
    except httpx.HTTPStatusError as e:
        logger.error("[LLM] ❌ HTTP %s from model API", e.response.status_code)
        raise LLMError(f"Model API returned {e.response.status_code}", status_code=e.response.status_code) from e
    except httpx.HTTPError as e:
        logger.error("[LLM] ❌ Transport error: %s", e)
        raise LLMError(f"Model API unreachable: {e}") from e

    content = data.get("content") or []
    if not content or content[0].get("type") != "text":
        raise LLMError("Unexpected response format from model")

    text = content[0]["text"]
    logger.info("[LLM] Response received, length: %d", len(text))
    return text
