"""Per-interaction navigation context."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NavigationContext:
    """What the user has selected so far in one interaction.

    Rebuilt from the incoming action (callback data or message text) and
    discarded once the screen is rendered; nothing is kept between updates.
    """

    column: str | None = None
    value: str | None = None
    # Telegram chat the interaction came from, for log context only.
    chat_id: int | None = None

    def remember(self, **kwargs) -> None:
        """Update known attributes, ignoring anything else.

        Example:
            ctx.remember(column="City", value="NY")
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def describe(self) -> str:
        parts = []
        if self.chat_id is not None:
            parts.append(f"chat={self.chat_id}")
        if self.column is not None:
            parts.append(f"column={self.column!r}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        return " ".join(parts) or "-"
