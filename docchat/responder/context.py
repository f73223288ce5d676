"""
Conversation Context Builder

Flattens prior turns into a text block. The engine computes it on every call
and logs it; it only reaches an answer when history context is enabled.
"""

from typing import Sequence

from ..common.schemas import ConversationTurn

CONTEXT_HEADER = "Previous conversation:"


def build_context(history: Sequence[ConversationTurn]) -> str:
    """Render history as "<role>: <content>" lines, or "" when there is none"""
    if not history:
        return ""

    lines = [f"{turn.role}: {turn.content}" for turn in history]
    return CONTEXT_HEADER + "\n" + "\n".join(lines)
