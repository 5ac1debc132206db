"""Reply payload models handed to the gateway."""

from pydantic import BaseModel, Field

DEFAULT_COLOR = 0x0099FF
LOGO_ATTACHMENT = "kaspa_logo.png"


class ReplyField(BaseModel):
    """A single labelled value in a reply.

    Attributes:
        label: Field heading.
        value: Field body (Discord markdown allowed).
        inline: Layout hint, True to place fields side by side.
    """

    label: str
    value: str
    inline: bool = False


class ReplyPayload(BaseModel):
    """Structured reply for one command invocation.

    Attributes:
        title: Reply title.
        description: Optional text shown under the title.
        fields: Ordered display fields.
        color: Accent color as a 24-bit RGB integer.
        thumbnail: Name of an attached media file to use as thumbnail.
    """

    title: str
    description: str | None = None
    fields: list[ReplyField] = Field(default_factory=list)
    color: int = DEFAULT_COLOR
    thumbnail: str | None = LOGO_ATTACHMENT

    def add_field(self, label: str, value: str, inline: bool = False) -> "ReplyPayload":
        """Append a field and return self for chaining."""
        self.fields.append(ReplyField(label=label, value=value, inline=inline))
        return self
