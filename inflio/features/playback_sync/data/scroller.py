import logging
from ..domain.interfaces import IScrollContainer, IScroller
from ..domain.models import ElementBox

logger = logging.getLogger(__name__)

def compute_center_offset(box: ElementBox, visible_height: float) -> float:
    """Scroll offset that puts the element's midpoint in the middle of the viewport."""
    return max(0.0, box.midpoint - visible_height / 2)

class ContainerScroller(IScroller):
    """
    Concrete IScroller that drives an IScrollContainer directly.
    """

    def __init__(self, container: IScrollContainer):
        self.container = container

    def center_on(self, element_id: str) -> None:
        box = self.container.element_box(element_id)
        if box is None:
            # Filtered out by search, or not rendered yet
            logger.debug(f"Element {element_id} is not rendered; skipping scroll.")
            return

        offset = compute_center_offset(box, self.container.visible_height)
        self.container.scroll_to(offset)
