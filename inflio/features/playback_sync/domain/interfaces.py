from abc import ABC, abstractmethod
from typing import Callable, Optional

from .models import ElementBox, PlaybackEvent

EventCallback = Callable[[], None]

class IMediaHandle(ABC):
    """
    Contract for the playable video the transcript follows.
    Abstracts away the host player (browser element, desktop widget, test double).
    """

    @property
    @abstractmethod
    def current_time(self) -> float:
        """Current playback position in seconds."""
        pass

    @abstractmethod
    def add_listener(self, event: PlaybackEvent, callback: EventCallback) -> None:
        pass

    @abstractmethod
    def remove_listener(self, event: PlaybackEvent, callback: EventCallback) -> None:
        pass

    @abstractmethod
    def seek(self, seconds: float) -> None:
        pass

    @abstractmethod
    def play(self) -> None:
        pass

class IScroller(ABC):
    """Capability that brings a rendered element into the middle of the viewport."""

    @abstractmethod
    def center_on(self, element_id: str) -> None:
        pass

class IScrollContainer(ABC):
    """
    Contract for the scrollable list the segment rows live in.
    """

    @property
    @abstractmethod
    def visible_height(self) -> float:
        pass

    @abstractmethod
    def element_box(self, element_id: str) -> Optional[ElementBox]:
        """Returns the element's box, or None if it is not currently rendered."""
        pass

    @abstractmethod
    def scroll_to(self, offset: float) -> None:
        pass
