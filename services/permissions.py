"""
Permission checks for wheel editing commands.
"""

import discord

from config import ADMIN_USER_IDS


def has_admin_permission(interaction: discord.Interaction) -> bool:
    """
    Check whether the user may edit the guild's wheel.

    Users listed in ADMIN_USER_IDS always may; otherwise the member needs
    Administrator or Manage Server in the guild.
    """
    if interaction.user.id in ADMIN_USER_IDS:
        return True

    member = None
    if interaction.guild:
        get_member = getattr(interaction.guild, "get_member", None)
        if callable(get_member):
            member = get_member(interaction.user.id)

    # interaction.user is already a Member inside guilds
    perms = getattr(member or interaction.user, "guild_permissions", None)
    if perms is None:
        return False
    return bool(getattr(perms, "administrator", False) or getattr(perms, "manage_guild", False))
