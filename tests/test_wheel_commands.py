"""Tests for the Wheel of Fortune slash commands."""

import random
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest

from commands.wheel import MAX_LABEL_LENGTH, WheelCommands
from domain.models.segment import SegmentSet
from domain.services.easing import linear
from domain.services.spin_planner import SpinPlanner
from services.spin_controller import SpinController
from services.wheel_manager import WheelManager
from utils.wheel_drawing import PillowWheelRenderer


def _factory(seed=None):
    renderer = PillowWheelRenderer(size=160)
    controller = SpinController(
        segment_set=SegmentSet.from_tuples(
            [("A", "#e74c3c", 1), ("B", "#3498db", 1), ("C", "#2ecc71", 1), ("D", "#f1c40f", 1)]
        ),
        planner=SpinPlanner(min_turns=5, max_turns=5, min_duration=2.0, max_duration=2.0, easing=linear),
        rng=random.Random(seed),
        render_sink=renderer,
        label_radius=renderer.radius * 0.72,
    )
    controller.rebuild()
    return controller


def _interaction(guild_id=123):
    interaction = MagicMock()
    interaction.guild_id = guild_id
    interaction.user.id = 456
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


@pytest.fixture
def cog():
    bot = MagicMock()
    return WheelCommands(bot, WheelManager(seed=7, factory=_factory))


def _sent_message(mock):
    call = mock.call_args
    return call.kwargs.get("content", call.args[0] if call.args else None)


@pytest.mark.asyncio
async def test_spin_sends_gif_then_result(cog):
    """Verify /spin defers, posts the GIF, and edits in the winner."""
    interaction = _interaction()
    message = MagicMock()
    message.edit = AsyncMock()
    interaction.followup.send = AsyncMock(return_value=message)

    def fake_gif(controller):
        # Run the spin to completion without rendering frames
        result = controller.spin_to_index(1)
        while not controller.tick(0.5).finished:
            pass
        return MagicMock(), result

    with patch("commands.wheel.asyncio.sleep", new_callable=AsyncMock) as sleep:
        with patch.object(cog, "_create_wheel_gif_file", side_effect=fake_gif):
            await cog.spin.callback(cog, interaction)

    interaction.response.defer.assert_awaited_once()
    interaction.followup.send.assert_awaited_once()
    assert "file" in interaction.followup.send.call_args.kwargs
    sleep.assert_awaited_once()
    assert sleep.call_args.args[0] == pytest.approx(2.5)

    embed = message.edit.call_args.kwargs["embed"]
    assert "B" in embed.description
    assert "25.0%" in embed.description


@pytest.mark.asyncio
async def test_spin_rejected_while_spinning(cog):
    controller = cog.wheel_manager.get(123)
    controller.spin_to_index(0)
    interaction = _interaction()

    await cog.spin.callback(cog, interaction)

    interaction.response.send_message.assert_awaited_once()
    assert "already spinning" in _sent_message(interaction.response.send_message)
    assert interaction.response.send_message.call_args.kwargs.get("ephemeral") is True
    interaction.response.defer.assert_not_awaited()
    assert controller.is_spinning


@pytest.mark.asyncio
async def test_spin_rejected_with_too_few_segments(cog):
    controller = cog.wheel_manager.get(123)
    controller.clear_segments()
    controller.add_segment("Solo")
    interaction = _interaction()

    await cog.spin.callback(cog, interaction)

    assert "at least two segments" in _sent_message(interaction.response.send_message)
    assert not controller.is_spinning


@pytest.mark.asyncio
async def test_spin_real_gif(cog):
    """End to end: the real GIF is attached and the wheel comes to rest."""
    interaction = _interaction()
    message = MagicMock()
    message.edit = AsyncMock()
    interaction.followup.send = AsyncMock(return_value=message)

    with patch("commands.wheel.WHEEL_GIF_FPS", 5):
        with patch("commands.wheel.asyncio.sleep", new_callable=AsyncMock):
            await cog.spin.callback(cog, interaction)

    sent_file = interaction.followup.send.call_args.kwargs["file"]
    assert isinstance(sent_file, discord.File)
    assert sent_file.filename == "wheel.gif"
    controller = cog.wheel_manager.get(123)
    assert not controller.is_spinning
    assert controller.last_result is not None
    message.edit.assert_awaited_once()


@pytest.mark.asyncio
async def test_wheel_shows_segments_and_image(cog):
    interaction = _interaction()

    await cog.wheel.callback(cog, interaction)

    kwargs = interaction.response.send_message.call_args.kwargs
    assert kwargs["file"].filename == "wheel.png"
    for label in ("A", "B", "C", "D"):
        assert f"**{label}**" in kwargs["embed"].description


@pytest.mark.asyncio
async def test_wheel_odds_simulation(cog):
    interaction = _interaction()

    with patch("commands.wheel.WHEEL_ODDS_SIMULATION_SPINS", 400):
        with patch("commands.wheel.draw_odds_chart", return_value=BytesIO(b"png")) as chart:
            await cog.wheel_odds.callback(cog, interaction, simulate=True)

    interaction.response.defer.assert_awaited_once()
    kwargs = interaction.followup.send.call_args.kwargs
    assert "Simulated 400 spins" in kwargs["content"]
    assert kwargs["file"].filename == "wheel_odds.png"
    assert chart.call_args.args[1] == [0.25] * 4
    assert chart.call_args.kwargs["observed"].sum() == 400


@pytest.mark.asyncio
async def test_wheel_odds_without_simulation(cog):
    interaction = _interaction()

    with patch("commands.wheel.draw_odds_chart", return_value=BytesIO(b"png")) as chart:
        await cog.wheel_odds.callback(cog, interaction, simulate=False)

    assert interaction.followup.send.call_args.kwargs["content"] is None
    assert chart.call_args.kwargs["observed"] is None


class TestEditCommands:
    """Tests for the admin-only segment editing commands."""

    @pytest.mark.asyncio
    async def test_add_requires_admin(self, cog):
        interaction = _interaction()
        with patch("commands.wheel.has_admin_permission", return_value=False):
            await cog.wheel_add.callback(cog, interaction, "E")

        assert "Only admins" in _sent_message(interaction.response.send_message)
        assert len(cog.wheel_manager.get(123).segment_set) == 4

    @pytest.mark.asyncio
    async def test_add_segment(self, cog):
        interaction = _interaction()
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_add.callback(cog, interaction, "Jackpot", 0.5, "#f1c40f")

        controller = cog.wheel_manager.get(123)
        assert controller.segment_set.labels[-1] == "Jackpot"
        assert controller.segment_set[-1].weight == 0.5
        assert "Added **Jackpot**" in _sent_message(interaction.response.send_message)

    @pytest.mark.asyncio
    async def test_add_rejects_long_label(self, cog):
        interaction = _interaction()
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_add.callback(cog, interaction, "x" * (MAX_LABEL_LENGTH + 1))

        assert len(cog.wheel_manager.get(123).segment_set) == 4

    @pytest.mark.asyncio
    async def test_add_rejected_while_spinning(self, cog):
        cog.wheel_manager.get(123).spin_to_index(0)
        interaction = _interaction()
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_add.callback(cog, interaction, "E")

        assert "while the wheel is spinning" in _sent_message(interaction.response.send_message)
        assert len(cog.wheel_manager.get(123).segment_set) == 4

    @pytest.mark.asyncio
    async def test_remove_segment(self, cog):
        interaction = _interaction()
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_remove.callback(cog, interaction, "b")

        assert cog.wheel_manager.get(123).segment_set.labels == ["A", "C", "D"]

    @pytest.mark.asyncio
    async def test_remove_missing_segment(self, cog):
        interaction = _interaction()
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_remove.callback(cog, interaction, "Nope")

        assert "No segment labelled" in _sent_message(interaction.response.send_message)

    @pytest.mark.asyncio
    async def test_clear_and_reset(self, cog):
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_clear.callback(cog, _interaction())
            assert len(cog.wheel_manager.get(123).segment_set) == 0

            await cog.wheel_reset.callback(cog, _interaction())
            assert len(cog.wheel_manager.get(123).segment_set) == 4

    @pytest.mark.asyncio
    async def test_reset_refused_while_spinning(self, cog):
        controller = cog.wheel_manager.get(123)
        controller.spin_to_index(2)
        interaction = _interaction()

        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_reset.callback(cog, interaction)

        assert "spinning" in _sent_message(interaction.response.send_message)
        assert cog.wheel_manager.get(123) is controller

    @pytest.mark.asyncio
    async def test_guilds_have_separate_wheels(self, cog):
        with patch("commands.wheel.has_admin_permission", return_value=True):
            await cog.wheel_add.callback(cog, _interaction(guild_id=1), "Only here")

        assert "Only here" in cog.wheel_manager.get(1).segment_set.labels
        assert "Only here" not in cog.wheel_manager.get(2).segment_set.labels
