"""Cursor over the table of contents panel."""

import logging
from typing import Optional, Sequence

from .document import Section

logger = logging.getLogger(__name__)


class ContentsState:
    """Selected entry of the contents list; movement wraps around."""

    def __init__(self, section_count: int):
        self.section_count = section_count
        self.selected = 0

    def next(self):
        if self.section_count == 0:
            logger.debug("no sections to move through")
            return
        self.selected = (self.selected + 1) % self.section_count

    def prev(self):
        if self.section_count == 0:
            logger.debug("no sections to move through")
            return
        self.selected = (self.selected - 1) % self.section_count

    def selected_section(self, sections: Optional[Sequence[Section]]) -> Optional[Section]:
        if not sections:
            return None
        assert self.selected < self.section_count
        return sections[self.selected]
