"""Constants and configuration for the wikiview reader."""

class ViewerConstants:
    """Central configuration constants for the reader."""

    # Disambiguation notices
    DISAMBIGUATION_PADDING = 1  # Columns of indentation for every notice line
    DISAMBIGUATION_PREFIX = '|'  # Marker drawn in front of every notice line

    # Anchors
    TOP_ANCHOR = "Content_Top"  # Synthetic anchor for the top of the document

    # Layout
    CONTENTS_PERCENT = 20  # Share of the width used by the contents panel
    PAGE_PADDING = 1  # Padding around the page area
    SCROLLBAR_MARGIN = 2  # Horizontal margin reserved for the scrollbar
    STATUS_HEIGHT = 1  # Rows used by the status line

    # Features
    SCROLLBAR = True
    LINK_SELECT = True

    # Punctuation that swallows a preceding synthetic gap
    CLOSING_PUNCTUATION = (',', '.', '"', "'")

    # Status messages
    STATUS_FORMAT = " wikiview | Page '{}' | Language '{}' | '{}' other languages available"
    NO_CONTENTS_MESSAGE = "No Contents available"
    PAGE_NOT_FOUND_MESSAGE = "Page '{}' is not available offline"
