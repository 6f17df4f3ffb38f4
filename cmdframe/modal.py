"""Data of submitted modals and extraction of their text inputs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class InputText:
    """A text input component of a submitted modal."""

    custom_id: str
    value: Optional[str] = None


@dataclass
class ActionRow:
    """A row of components in a submitted modal."""

    components: List[Any] = field(default_factory=list)


@dataclass
class ModalInteractionData:
    """The data of a modal submit interaction."""

    custom_id: str
    components: List[ActionRow] = field(default_factory=list)


def find_modal_text(data: ModalInteractionData, custom_id: str) -> Optional[str]:
    """Take the text of the input named ``custom_id`` out of ``data``.

    The value is removed from the input. Blank or missing text gives ``None``.
    Unexpected rows are logged and skipped.
    """
    for row in data.components:
        if not row.components:
            logger.warning("empty action row in modal response")
            continue
        text = row.components[0]
        if not isinstance(text, InputText):
            logger.warning("unexpected non input text component in modal response")
            continue
        if text.custom_id == custom_id:
            value, text.value = text.value, None
            return value or None
    logger.warning(
        "%s not found in modal response (expected at least blank string)", custom_id
    )
    return None