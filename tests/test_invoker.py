"""TDD: InferenceInvoker retry tests written FIRST"""
import json
from unittest.mock import AsyncMock

import pytest

from food_lens.config import AnalyzerSettings
from food_lens.errors import (
    AuthenticationError,
    MalformedResponseError,
    MissingFieldError,
    NotFoundError,
    TransportError,
)
from food_lens.image_loader import EncodedImage
from food_lens.invoker import InferenceInvoker
from food_lens.validator import validate_response
from food_lens.vision.client import VisionClient

IMAGE = EncodedImage(data="aGVsbG8=")
GOOD = json.dumps(
    {"food": "Toast", "nutritionInfo": {"calories": "80 kcal", "protein": "3 g", "carbs": "14 g"}}
)


class FakeVisionClient(VisionClient):
    name = "fake"

    def __init__(self, *outcomes) -> None:
        self.remote = AsyncMock(side_effect=list(outcomes))

    async def generate(self, prompt: str, image: EncodedImage) -> str:
        return await self.remote(prompt, image)


def make_invoker(client, **settings):
    delays: list[float] = []

    async def sleep(seconds: float) -> None:
        delays.append(seconds)

    return InferenceInvoker(client, AnalyzerSettings(**settings), sleep=sleep), delays


async def test_first_attempt_success_returns_text_without_sleeping():
    client = FakeVisionClient("hello")
    invoker, delays = make_invoker(client)

    assert await invoker.invoke("prompt", IMAGE) == "hello"

    client.remote.assert_awaited_once_with("prompt", IMAGE)
    assert delays == []


async def test_always_failing_remote_uses_every_attempt_and_raises_last_error():
    errors = [TransportError("first"), TransportError("second"), TransportError("third")]
    client = FakeVisionClient(*errors)
    invoker, delays = make_invoker(client)

    with pytest.raises(TransportError) as info:
        await invoker.invoke("prompt", IMAGE)

    assert info.value is errors[-1]
    assert client.remote.await_count == 3
    assert delays == [2.0, 2.0]


@pytest.mark.parametrize("max_retries", [0, 1, 4])
async def test_attempt_count_follows_max_retries(max_retries):
    client = FakeVisionClient(*[TransportError(str(i)) for i in range(max_retries + 1)])
    invoker, delays = make_invoker(client, max_retries=max_retries, retry_delay_ms=250)

    with pytest.raises(TransportError, match=str(max_retries)):
        await invoker.invoke("prompt", IMAGE)

    assert client.remote.await_count == max_retries + 1
    assert delays == [0.25] * max_retries


async def test_recovers_after_transient_failure():
    client = FakeVisionClient(TransportError("503"), "ok")
    invoker, delays = make_invoker(client)

    assert await invoker.invoke("prompt", IMAGE) == "ok"
    assert client.remote.await_count == 2
    assert delays == [2.0]


async def test_sdk_exceptions_are_wrapped_in_transport_error():
    boom = RuntimeError("API down")
    client = FakeVisionClient(boom, boom, boom)
    invoker, _ = make_invoker(client)

    with pytest.raises(TransportError, match="API down") as info:
        await invoker.invoke("prompt", IMAGE)

    assert info.value.__cause__ is boom


async def test_authentication_errors_consume_retries():
    client = FakeVisionClient(*[AuthenticationError("bad key")] * 3)
    invoker, _ = make_invoker(client)

    with pytest.raises(AuthenticationError):
        await invoker.invoke("prompt", IMAGE)

    assert client.remote.await_count == 3


async def test_non_retryable_error_surfaces_immediately():
    client = FakeVisionClient(NotFoundError("gone"), "never reached")
    invoker, delays = make_invoker(client)

    with pytest.raises(NotFoundError):
        await invoker.invoke("prompt", IMAGE)

    assert client.remote.await_count == 1
    assert delays == []


# ── parse runs inside the attempt ─────────────────────────────────────────────


async def test_parse_errors_consume_retries_and_recover():
    client = FakeVisionClient("sorry, no idea", GOOD)
    invoker, delays = make_invoker(client)

    result = await invoker.invoke("prompt", IMAGE, validate_response)

    assert result.food == "Toast"
    assert client.remote.await_count == 2
    assert delays == [2.0]


async def test_last_parse_error_is_surfaced_after_exhaustion():
    client = FakeVisionClient("no json", "still none", '{"food": "Tea"}')
    invoker, _ = make_invoker(client)

    with pytest.raises(MissingFieldError) as info:
        await invoker.invoke("prompt", IMAGE, validate_response)

    assert info.value.fields == ("nutritionInfo",)


async def test_invalid_responses_fail_fast_when_retry_disabled():
    client = FakeVisionClient("no json here", GOOD)
    invoker, delays = make_invoker(client, retry_invalid_responses=False)

    with pytest.raises(MalformedResponseError):
        await invoker.invoke("prompt", IMAGE, validate_response)

    assert client.remote.await_count == 1
    assert delays == []


async def test_transport_errors_still_retry_when_invalid_retry_disabled():
    client = FakeVisionClient(TransportError("503"), GOOD)
    invoker, _ = make_invoker(client, retry_invalid_responses=False)

    result = await invoker.invoke("prompt", IMAGE, validate_response)

    assert result.food == "Toast"


async def test_deeply_nested_reply_is_retried_as_malformed():
    client = FakeVisionClient("[" * 200000 + "]" * 200000, GOOD)
    invoker, delays = make_invoker(client)

    result = await invoker.invoke("prompt", IMAGE, validate_response)

    assert result.food == "Toast"
    assert client.remote.await_count == 2
    assert delays == [2.0]


async def test_unexpected_parse_failure_is_classified_and_retried():
    client = FakeVisionClient("first", "second")
    invoker, delays = make_invoker(client, max_retries=1)

    def parse(text: str):
        raise RuntimeError(f"bad {text}")

    with pytest.raises(MalformedResponseError) as info:
        await invoker.invoke("prompt", IMAGE, parse)

    assert str(info.value) == "bad second"
    assert isinstance(info.value.__cause__, RuntimeError)
    assert client.remote.await_count == 2
    assert delays == [2.0]
