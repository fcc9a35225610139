import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionMessageParam

__all__ = ["safe_chat_completion", "first_message_text"]


async def safe_chat_completion(
    client: AsyncOpenAI,
    *,
    model: str,
    messages: Iterable[dict[str, Any]],
    logger: logging.Logger | None = None,
    retry_attempts: int = 2,
    retry_backoff: float = 0.5,
    **kwargs,
) -> ChatCompletion:
    """Call the chat completion endpoint with bounded retries.

    Parameters
    ----------
    client:
        An initialised ``openai.AsyncOpenAI`` client.
    model:
        Model name to call.
    messages:
        Messages for the chat completion endpoint.
    logger:
        Optional logger; defaults to the module logger.
    retry_attempts:
        Total number of attempts before giving up.
    retry_backoff:
        Base delay in seconds, doubled after every failed attempt.
    **kwargs:
        Forwarded to ``client.chat.completions.create``.

    Raises
    ------
    Exception
        The last error once every attempt has failed.
    """
    if client is None:
        raise RuntimeError("OpenAI client is not initialised.")
    if retry_attempts < 1:
        raise ValueError("retry_attempts must be at least 1")

    logger = logger or logging.getLogger(__name__)
    typed_messages: Iterable[ChatCompletionMessageParam] = messages  # type: ignore[assignment]
    last_exc: Exception | None = None

    for attempt in range(1, retry_attempts + 1):
        try:
            loop = asyncio.get_running_loop()
            started = loop.time()
            completion = await client.chat.completions.create(
                model=model,
                messages=typed_messages,
                **kwargs,
            )
            logger.debug(
                "OpenAI completions.create call succeeded | model=%s | latency=%.2fs",
                model,
                loop.time() - started,
            )
            return completion
        except Exception as exc:  # noqa: BLE001
            last_exc = exc
            logger.warning("OpenAI call failed (attempt %s/%s): %s", attempt, retry_attempts, exc)
            if attempt < retry_attempts:
                await asyncio.sleep(retry_backoff * (2 ** (attempt - 1)))

    assert last_exc is not None
    raise last_exc


def first_message_text(completion: ChatCompletion) -> str:
    """Text of the first choice, stripped; empty string when absent."""
    if not completion.choices:
        return ""
    content = completion.choices[0].message.content
    return (content or "").strip()
