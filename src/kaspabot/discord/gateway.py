"""Adapters between discord.py interactions and the dispatcher."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import discord

from kaspabot.models import CommandEvent, ReplyPayload


def render_payload(
    payload: ReplyPayload, logo_path: Path | None = None
) -> tuple[discord.Embed, list[discord.File]]:
    """Turn a ReplyPayload into an Embed plus its attachments.

    The thumbnail is only set when the logo file exists, so a missing
    asset never breaks a reply.

    Args:
        payload: Reply to render.
        logo_path: Local file backing the thumbnail attachment.

    Returns:
        The embed and the files to upload with it.
    """
    embed = discord.Embed(
        title=payload.title,
        description=payload.description,
        color=payload.color,
    )
    for field in payload.fields:
        embed.add_field(name=field.label, value=field.value, inline=field.inline)

    files: list[discord.File] = []
    if payload.thumbnail and logo_path is not None and logo_path.is_file():
        embed.set_thumbnail(url=f"attachment://{payload.thumbnail}")
        files.append(discord.File(logo_path, filename=payload.thumbnail))
    return embed, files


def event_from_interaction(
    interaction: discord.Interaction, **parameters: Any
) -> CommandEvent:
    """Build a CommandEvent from a slash command interaction."""
    command = interaction.command
    return CommandEvent(
        command_id=command.name if command is not None else "",
        user_id=str(interaction.user.id),
        parameters={k: v for k, v in parameters.items() if v is not None},
    )


class InteractionReplyChannel:
    """Two-phase reply channel over a Discord interaction.

    Before ``acknowledge`` replies go out as the initial response; after it
    they edit the deferred ("thinking...") response.

    Args:
        interaction: The interaction being answered.
        logo_path: Local logo file for reply thumbnails.
    """

    def __init__(
        self, interaction: discord.Interaction, logo_path: Path | None = None
    ) -> None:
        self._interaction = interaction
        self._logo_path = logo_path

    @property
    def acknowledged(self) -> bool:
        return self._interaction.response.is_done()

    async def acknowledge(self) -> None:
        if not self.acknowledged:
            await self._interaction.response.defer(thinking=True)

    async def deliver(self, payload: ReplyPayload) -> None:
        embed, files = render_payload(payload, self._logo_path)
        if self.acknowledged:
            await self._interaction.edit_original_response(embed=embed, attachments=files)
            return

        kwargs: dict[str, Any] = {"embed": embed}
        if files:
            kwargs["files"] = files
        await self._interaction.response.send_message(**kwargs)

    async def deliver_text(self, text: str) -> None:
        if self.acknowledged:
            await self._interaction.edit_original_response(content=text, embed=None)
        else:
            await self._interaction.response.send_message(text)
