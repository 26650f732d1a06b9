"""
Wheel of Fortune commands: spin the guild's wheel and edit its segments.
"""

from __future__ import annotations

import asyncio
import logging
import random

import discord
from discord import app_commands
from discord.ext import commands

from config import WHEEL_GIF_FPS, WHEEL_ODDS_SIMULATION_SPINS, WHEEL_RESULT_HOLD_MS
from services.permissions import has_admin_permission
from services.result import Result
from services.spin_controller import SpinController, SpinOutcome
from services.wheel_manager import WheelManager
from services.wheel_stats_service import WheelStatsService
from utils.drawing import draw_odds_chart
from utils.wheel_drawing import create_wheel_gif, hex_to_rgb, wheel_image_to_bytes

logger = logging.getLogger("fortune_bot.commands.wheel")

MAX_LABEL_LENGTH = 32

# Seconds between the GIF landing and the result embed
RESULT_REVEAL_PAUSE = 0.5


class WheelCommands(commands.Cog):
    """Slash commands for the per-guild Wheel of Fortune."""

    def __init__(
        self,
        bot: commands.Bot,
        wheel_manager: WheelManager,
        stats_service: WheelStatsService | None = None,
    ):
        self.bot = bot
        self.wheel_manager = wheel_manager
        self.stats_service = stats_service or WheelStatsService()

    # Helpers

    def _create_wheel_gif_file(self, controller: SpinController) -> tuple[discord.File | None, Result]:
        """Spin the wheel into a GIF and wrap it as a discord.File."""
        buffer, result = create_wheel_gif(controller, fps=WHEEL_GIF_FPS, hold_ms=WHEEL_RESULT_HOLD_MS)
        if buffer is None:
            return None, result
        return discord.File(buffer, filename="wheel.gif"), result

    def _spin_result_embed(self, outcome: SpinOutcome, controller: SpinController) -> discord.Embed:
        """Build the result embed shown once the wheel stops."""
        segment_set = controller.segment_set
        color = discord.Color.gold()
        odds_text = ""
        if 0 <= outcome.index < len(segment_set):
            color = discord.Color.from_rgb(*hex_to_rgb(segment_set[outcome.index].color))
            probabilities = self.stats_service.segment_probabilities(segment_set)
            if probabilities:
                odds_text = f"\n\n*Odds of this result: {probabilities[outcome.index]:.1%}*"

        return discord.Embed(
            title="🎡 The wheel has spoken!",
            description=f"**{outcome.label or '(unlabelled)'}**{odds_text}",
            color=color,
        )

    def _wheel_summary_embed(self, controller: SpinController) -> discord.Embed:
        segment_set = controller.segment_set
        probabilities = self.stats_service.segment_probabilities(segment_set)

        if not probabilities:
            description = (
                f"The wheel has **{len(segment_set)}** segment(s) and needs at least two to spin.\n"
                f"Use `/wheel_add` to add more."
            )
        else:
            lines = [
                f"`{i + 1:>2}.` **{segment.label}** - weight {segment.weight:g} ({p:.1%})"
                for i, (segment, p) in enumerate(zip(segment_set, probabilities))
            ]
            description = "\n".join(lines)

        embed = discord.Embed(title="🎡 Wheel of Fortune", description=description, color=discord.Color.blurple())
        if controller.is_spinning:
            embed.set_footer(text="Spinning...")
        return embed

    # Commands

    @app_commands.command(name="spin", description="Spin the Wheel of Fortune!")
    async def spin(self, interaction: discord.Interaction):
        controller = self.wheel_manager.get(interaction.guild_id)

        if controller.is_spinning:
            await interaction.response.send_message("The wheel is already spinning!", ephemeral=True)
            return
        if not controller.segment_set.is_spinnable:
            await interaction.response.send_message(
                "The wheel needs at least two segments to spin. Use `/wheel_add` first.",
                ephemeral=True,
            )
            return

        # Defer first - GIF generation can take a few seconds
        await interaction.response.defer()

        gif_file, result = self._create_wheel_gif_file(controller)
        if not result:
            logger.info(f"Spin rejected in guild {interaction.guild_id}: {result.error_code}")
            await interaction.followup.send(result.error, ephemeral=True)
            return

        message = await interaction.followup.send(file=gif_file, wait=True)

        # Let the animation play out before revealing the result
        await asyncio.sleep(result.value.duration + RESULT_REVEAL_PAUSE)

        outcome = controller.last_result
        if outcome is None:
            logger.warning(f"Spin in guild {interaction.guild_id} finished without an outcome")
            return
        await message.edit(embed=self._spin_result_embed(outcome, controller))

    @app_commands.command(name="wheel", description="Show the wheel's segments and odds")
    async def wheel(self, interaction: discord.Interaction):
        controller = self.wheel_manager.get(interaction.guild_id)
        if controller.is_layout_stale:
            controller.rebuild()

        embed = self._wheel_summary_embed(controller)
        renderer = controller.render_sink
        if renderer is None:
            await interaction.response.send_message(embed=embed)
            return

        image = wheel_image_to_bytes(renderer.render())
        embed.set_image(url="attachment://wheel.png")
        await interaction.response.send_message(embed=embed, file=discord.File(image, filename="wheel.png"))

    @app_commands.command(name="wheel_odds", description="Chart each segment's chance to win")
    @app_commands.describe(simulate="Also run a batch of simulated spins and compare")
    async def wheel_odds(self, interaction: discord.Interaction, simulate: bool = False):
        controller = self.wheel_manager.get(interaction.guild_id)
        segment_set = controller.segment_set
        probabilities = self.stats_service.segment_probabilities(segment_set)

        await interaction.response.defer()

        observed = None
        content = None
        if simulate and probabilities:
            # Separate generator so the wheel's own sequence is untouched
            observed = self.stats_service.simulate_spins(segment_set, random.Random(), WHEEL_ODDS_SIMULATION_SPINS)
            report = self.stats_service.fairness_test(observed, probabilities)
            verdict = "matches" if report.is_consistent() else "does NOT match"
            content = (
                f"Simulated {report.spins} spins: distribution {verdict} the configured odds "
                f"(χ²={report.chi_square:.2f}, p={report.p_value:.3f})."
            )

        chart = draw_odds_chart(
            segment_set.labels if probabilities else [],
            probabilities,
            observed=observed,
            colors=[s.color for s in segment_set],
        )
        await interaction.followup.send(content=content, file=discord.File(chart, filename="wheel_odds.png"))

    @app_commands.command(name="wheel_add", description="Add a segment to the wheel (Admin only)")
    @app_commands.describe(
        label="Text shown on the segment",
        weight="Relative chance to win (0 = never, unless all are 0)",
        color="Segment color, e.g. #f1c40f",
    )
    async def wheel_add(
        self,
        interaction: discord.Interaction,
        label: str,
        weight: float = 1.0,
        color: str = "#ffffff",
    ):
        if not has_admin_permission(interaction):
            await interaction.response.send_message("Only admins can edit the wheel.", ephemeral=True)
            return
        if len(label) > MAX_LABEL_LENGTH:
            await interaction.response.send_message(
                f"Labels can be at most {MAX_LABEL_LENGTH} characters.", ephemeral=True
            )
            return

        controller = self.wheel_manager.get(interaction.guild_id)
        result = controller.add_segment(label, color, weight)
        if not result:
            await interaction.response.send_message(result.error, ephemeral=True)
            return

        segment = result.value
        logger.info(f"Guild {interaction.guild_id}: added segment {segment.label!r} (weight {segment.weight:g})")
        await interaction.response.send_message(
            f"Added **{segment.label}** with weight {segment.weight:g}. "
            f"The wheel now has {len(controller.segment_set)} segments.",
            ephemeral=True,
        )

    @app_commands.command(name="wheel_remove", description="Remove a segment by label (Admin only)")
    @app_commands.describe(label="Label of the segment to remove (case-insensitive)")
    async def wheel_remove(self, interaction: discord.Interaction, label: str):
        if not has_admin_permission(interaction):
            await interaction.response.send_message("Only admins can edit the wheel.", ephemeral=True)
            return

        controller = self.wheel_manager.get(interaction.guild_id)
        result = controller.remove_segment_by_label(label)
        if not result:
            await interaction.response.send_message(result.error, ephemeral=True)
            return

        logger.info(f"Guild {interaction.guild_id}: removed segment {label!r}")
        await interaction.response.send_message(
            f"Removed **{label}**. The wheel now has {len(controller.segment_set)} segments.",
            ephemeral=True,
        )

    @app_commands.command(name="wheel_clear", description="Remove every segment (Admin only)")
    async def wheel_clear(self, interaction: discord.Interaction):
        if not has_admin_permission(interaction):
            await interaction.response.send_message("Only admins can edit the wheel.", ephemeral=True)
            return

        controller = self.wheel_manager.get(interaction.guild_id)
        result = controller.clear_segments()
        if not result:
            await interaction.response.send_message(result.error, ephemeral=True)
            return

        logger.info(f"Guild {interaction.guild_id}: cleared wheel")
        await interaction.response.send_message("The wheel is now empty.", ephemeral=True)

    @app_commands.command(name="wheel_reset", description="Restore the default wheel (Admin only)")
    async def wheel_reset(self, interaction: discord.Interaction):
        if not has_admin_permission(interaction):
            await interaction.response.send_message("Only admins can edit the wheel.", ephemeral=True)
            return

        controller = self.wheel_manager.reset(interaction.guild_id)
        if controller is None:
            await interaction.response.send_message(
                "The wheel is spinning. Try again once it stops.", ephemeral=True
            )
            return

        await interaction.response.send_message(
            f"Wheel reset to {len(controller.segment_set)} default segments.", ephemeral=True
        )


async def setup(bot: commands.Bot):
    """Setup function called when loading the cog."""
    wheel_manager = getattr(bot, "wheel_manager", None)
    if wheel_manager is None:
        wheel_manager = WheelManager()
        bot.wheel_manager = wheel_manager

    await bot.add_cog(WheelCommands(bot, wheel_manager))
    logger.info("WheelCommands cog loaded")
