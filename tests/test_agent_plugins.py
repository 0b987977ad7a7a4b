from __future__ import annotations

from types import SimpleNamespace
from typing import List, Tuple

import discord
import pytest

from discord_droll.agent import AgentPlugin, BotAgent
from discord_droll.config import Settings
from discord_droll.plugins import DiceRollPlugin
from discord_droll.triggers import TriggerFilter


class DummyChannel:
    def __init__(self, name: str = "table") -> None:
        self.name = name
        self.sent: List[str] = []

    async def send(self, content: str, **kwargs) -> None:  # pragma: no cover - exercised in tests
        self.sent.append(content)


class FakeDicePipeline:
    def __init__(self, handled: bool = True) -> None:
        self.calls: List[Tuple[object, str]] = []
        self._handled = handled

    async def handle_roll(self, channel, roll_label: str) -> bool:
        self.calls.append((channel, roll_label))
        return self._handled


class DummyAgent:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.client = SimpleNamespace(user=SimpleNamespace(id=999))


def roll_message(*, author_id: int = 1, author_name: str = "Beyond 20", title: str = "Ds") -> SimpleNamespace:
    embed = discord.Embed(title=title).add_field(name=":three:", value="3")
    return SimpleNamespace(
        id=7,
        author=SimpleNamespace(id=author_id, name=author_name, bot=True),
        interaction=SimpleNamespace(name="roll"),
        embeds=[embed],
        channel=DummyChannel(),
    )


@pytest.mark.asyncio
async def test_dice_plugin_routes_matching_roll(settings: Settings) -> None:
    pipeline = FakeDicePipeline()
    plugin = DiceRollPlugin(TriggerFilter(settings), pipeline)
    message = roll_message()

    handled = await plugin.handle_message(DummyAgent(settings), message)

    assert handled is True
    assert pipeline.calls == [(message.channel, ":three:")]


@pytest.mark.asyncio
async def test_dice_plugin_ignores_other_messages(settings: Settings) -> None:
    pipeline = FakeDicePipeline()
    plugin = DiceRollPlugin(TriggerFilter(settings), pipeline)

    handled = await plugin.handle_message(DummyAgent(settings), roll_message(title="Attack"))

    assert handled is False
    assert pipeline.calls == []


@pytest.mark.asyncio
async def test_dice_plugin_ignores_own_messages(settings: Settings) -> None:
    pipeline = FakeDicePipeline()
    plugin = DiceRollPlugin(TriggerFilter(settings), pipeline)

    handled = await plugin.handle_message(DummyAgent(settings), roll_message(author_id=999))

    assert handled is False
    assert pipeline.calls == []


@pytest.mark.asyncio
async def test_dice_plugin_passes_through_rejected_label(settings: Settings) -> None:
    pipeline = FakeDicePipeline(handled=False)
    plugin = DiceRollPlugin(TriggerFilter(settings), pipeline)

    handled = await plugin.handle_message(DummyAgent(settings), roll_message())

    assert handled is False
    assert len(pipeline.calls) == 1


@pytest.mark.asyncio
async def test_agent_respects_plugin_priority(settings: Settings) -> None:
    results: List[str] = []

    class FirstPlugin(AgentPlugin):
        name = "first"
        priority = 10

        async def handle_message(self, agent: BotAgent, message) -> bool:
            results.append("first")
            return True

    class SecondPlugin(AgentPlugin):
        name = "second"
        priority = 20

        async def handle_message(self, agent: BotAgent, message) -> bool:
            results.append("second")
            return False

    agent = BotAgent(settings=settings)
    agent.add_plugin(SecondPlugin())
    agent.add_plugin(FirstPlugin())

    await agent.on_message(roll_message())  # type: ignore[arg-type]

    assert results == ["first"]

    await agent.close()


@pytest.mark.asyncio
async def test_agent_ignores_self_authored_messages(settings: Settings, monkeypatch) -> None:
    results: List[str] = []

    class RecordingPlugin(AgentPlugin):
        async def handle_message(self, agent: BotAgent, message) -> bool:
            results.append(message.id)
            return True

    monkeypatch.setattr(discord.Client, "user", property(lambda self: SimpleNamespace(id=999)))
    agent = BotAgent(settings=settings)
    agent.add_plugin(RecordingPlugin())

    await agent.on_message(roll_message(author_id=999))  # type: ignore[arg-type]

    assert results == []

    await agent.close()


@pytest.mark.asyncio
async def test_agent_survives_plugin_errors(settings: Settings) -> None:
    results: List[str] = []

    class BrokenPlugin(AgentPlugin):
        name = "broken"
        priority = 10

        async def handle_message(self, agent: BotAgent, message) -> bool:
            raise RuntimeError("upstream blew up")

    class LaterPlugin(AgentPlugin):
        name = "later"
        priority = 20

        async def handle_message(self, agent: BotAgent, message) -> bool:
            results.append("later")
            return True

    agent = BotAgent(settings=settings)
    agent.add_plugin(BrokenPlugin())
    agent.add_plugin(LaterPlugin())

    await agent.on_message(roll_message())  # type: ignore[arg-type]

    assert results == []

    await agent.close()


@pytest.mark.asyncio
async def test_agent_listens_for_messages_with_content_intent(settings: Settings) -> None:
    agent = BotAgent(settings=settings, intents=discord.Intents.none())

    assert agent.client.on_message == agent.on_message
    assert agent.client.intents.message_content is True

    await agent.close()
