"""Data classes describing one entry of a message file."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Image:
    """An image shown in a message dialog."""

    graphic: int = 0
    x: int = 0
    y: int = 0

    def is_empty(self) -> bool:
        """An image without a graphic counts as absent."""
        return self.graphic == 0


@dataclass
class Dialog:
    """Position and size of the message dialog."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class MessageString:
    """A text with its offset in the data part of the file."""

    offset: int = 0
    text: str = ""

    def is_empty(self) -> bool:
        """True when neither an offset nor any text is set."""
        return self.offset == 0 and not self.text


@dataclass
class StringWithPosition(MessageString):
    """A text that is also placed at a position."""

    x: int = 0
    y: int = 0


@dataclass
class MessageEntry:
    """One message with its layout, images and texts."""

    id: int
    type: int = 0
    subtype: int = 0
    image: Image = field(default_factory=Image)
    image2: Image = field(default_factory=Image)
    dialog: Dialog = field(default_factory=Dialog)
    urgent: bool = False
    title: StringWithPosition = field(default_factory=StringWithPosition)
    subtitle: StringWithPosition = field(default_factory=StringWithPosition)
    video: StringWithPosition = field(default_factory=StringWithPosition)
    content: MessageString = field(default_factory=MessageString)

    def is_empty(self) -> bool:
        """True when no image, dialog geometry or text is set."""
        if not self.image.is_empty() or not self.image2.is_empty():
            return False
        d = self.dialog
        if d.x or d.y or d.width or d.height:
            return False
        return (
            self.title.is_empty()
            and self.subtitle.is_empty()
            and self.video.is_empty()
            and self.content.is_empty()
        )