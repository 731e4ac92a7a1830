from types import SimpleNamespace

import pytest

from chefmate.errors import GenerationFailure
from chefmate.schemas import RestaurantContext


class StubCompletionClient:
    """Stand-in for ``CompletionClient`` that replays canned replies."""

    def __init__(self, replies=()):
        self.replies = list(replies)
        self.calls = []

    def _next(self):
        if not self.replies:
            raise GenerationFailure("No stubbed reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def complete(self, system_prompt, user_prompt, options=None):
        self.calls.append(
            {"system": system_prompt, "user": user_prompt, "options": options}
        )
        return self._next()

    async def converse(
        self, system_prompt, history, user_message, options=None, *, max_history=10
    ):
        self.calls.append(
            {
                "system": system_prompt,
                "history": list(history)[-max_history:],
                "user": user_message,
                "options": options,
            }
        )
        return self._next()


class FakeCompletions:
    """Records ``chat.completions.create`` kwargs and returns a fixed message."""

    def __init__(self, content="{}", refusal=None, error=None):
        self.content = content
        self.refusal = refusal
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content, refusal=self.refusal)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def context():
    return RestaurantContext(
        name="The Brass Anchor",
        theme="Coastal Tavern",
        categories=["Appetizers", "Entrees", "Desserts"],
        location="Portland, Maine",
        kitchen_capability="advanced",
        staff_size=12,
    )


@pytest.fixture
def stub_client():
    return StubCompletionClient


@pytest.fixture
def fake_completions():
    return FakeCompletions
