"""Page navigation state driven by previous/next button presses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Optional, Sequence

PAGINATION_TIMEOUT = 3600 * 24


@dataclass
class Paginator:
    """Tracks the shown page of ``pages`` for buttons whose ids start with ``ctx_id``."""

    pages: Sequence[str]
    ctx_id: Hashable
    index: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if not self.pages:
            raise ValueError("at least one page is required")

    @property
    def prev_button_id(self) -> str:
        return f"{self.ctx_id}prev"

    @property
    def next_button_id(self) -> str:
        return f"{self.ctx_id}next"

    def press(self, custom_id: str) -> Optional[str]:
        """Handle a button press and return the new page, or ``None`` if unrelated."""
        if not custom_id.startswith(str(self.ctx_id)):
            return None
        if custom_id == self.next_button_id:
            self.index = (self.index + 1) % len(self.pages)
        elif custom_id == self.prev_button_id:
            self.index = (self.index - 1) % len(self.pages)
        else:
            return None
        return self.current()

    def current(self) -> str:
        """Return the page currently shown."""
        return self.pages[self.index]