"""
Data structures for a server status response.

The status payload is a JSON document:

    {
        "version": {"name": "1.21.5", "protocol": 770},
        "players": {"max": 20, "online": 1, "sample": [{"name": "...", "id": "..."}]},
        "description": <rich text>,
        "favicon": "data:image/png;base64,..."
    }

`description` is a rich text component: a string, a list of components, or
an object whose "text" and "extra" fields hold more components. The raw value
is kept as-is on ServerStatus.raw_description and flattened to plain text in
ServerStatus.description.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from craftbot.protocol.errors import JsonError


class Version(BaseModel):
    """Server software version and protocol number."""

    name: str = Field(description="Human readable version, e.g. '1.21.5' or 'Paper 1.20.4'")
    protocol: int = Field(description="Protocol version number the server speaks")


class PlayerSample(BaseModel):
    """One entry of the online player sample."""

    name: str
    id: str = Field(description="Player UUID in hyphenated form")


class Players(BaseModel):
    max: int = Field(ge=0, description="Player slots")
    online: int = Field(ge=0, description="Players currently online")
    sample: list[PlayerSample] | None = Field(
        None, description="Subset of online players (servers may omit or hide it)"
    )


class ServerStatus(BaseModel):
    """
    Parsed status response.

    `description` is flattened from `raw_description` on every access, so it
    follows assignments and model_copy updates. It is not part of the
    serialized form; dumping with by_alias=True reproduces the wire shape.

    Example:
        >>> status = ServerStatus.model_validate({
        ...     "version": {"name": "1.21.5", "protocol": 770},
        ...     "players": {"max": 20, "online": 0},
        ...     "description": {"text": "A ", "extra": ["Minecraft Server"]},
        ... })
        >>> status.description
        'A Minecraft Server'
    """

    version: Version
    players: Players
    raw_description: Any = Field(alias="description")
    favicon: str | None = Field(None, description="PNG data URI (base64)")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def description(self) -> str:
        """Plain text of the rich text description."""
        return flatten_text(self.raw_description)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "ServerStatus":
        """
        Parse a JSON status payload.

        Raises:
            JsonError: If the payload is not JSON or does not match the schema
        """
        try:
            return cls.model_validate_json(payload)
        except ValidationError as e:
            raise JsonError(f"Invalid status payload: {e}") from e

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


def flatten_text(value: Any) -> str:
    """
    Flatten a rich text component to plain text.

    Strings are kept, lists are concatenated in order, objects contribute
    their "text" followed by their "extra"; every other value (numbers,
    booleans, null) contributes nothing.

    Uses an explicit stack so deeply nested components cannot exhaust the
    interpreter's recursion limit.
    """
    parts: list[str] = []
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, list):
            stack.extend(reversed(node))
        elif isinstance(node, dict):
            # Pushed in reverse so "text" is emitted before "extra"
            if "extra" in node:
                stack.append(node["extra"])
            if "text" in node:
                stack.append(node["text"])
    return "".join(parts)
