"""Presentation tokens for schedule items - no I/O dependencies."""

from dataclasses import dataclass

from .models import ItemType


@dataclass(frozen=True)
class Style:
    """Presentation token for a schedule item."""

    tone: str
    strikethrough: bool = False
    muted: bool = False


COMPLETED_STYLE = Style(tone="slate", strikethrough=True, muted=True)

_TYPE_STYLES = {
    ItemType.TASK: Style(tone="blue"),
    ItemType.ROUTINE: Style(tone="purple"),
    ItemType.EVENT: Style(tone="orange"),
    ItemType.DEADLINE: Style(tone="rose"),
}


def style_for(item_type: ItemType | str, status: str) -> Style:
    """
    Map an item type and status to a style.

    Total: every combination gets a style. Completed items are muted and
    struck through whatever their type; unknown types render as deadlines.
    """
    if status == "completed":
        return COMPLETED_STYLE
    try:
        item_type = ItemType(item_type)
    except ValueError:
        return _TYPE_STYLES[ItemType.DEADLINE]
    return _TYPE_STYLES[item_type]
