"""Constants and configuration for the pageflow paginator."""

class PaginatorConstants:
    """Central configuration constants for pagination."""
    
    # Page layout
    MAX_CHARS_PER_LINE = 80  # Characters per output line, spaces included
    MAX_LINES_PER_PAGE = 25  # Output lines per page
    MAX_LAYOUT_LIMIT = 1000  # Upper bound accepted from saved settings
    
    # Output format
    PAGE_HEADER_FORMAT = "--- Page %d --- \n"  # Trailing space is part of the format
    
    # Default file names
    DEFAULT_INPUT_FILE = "document.txt"
    DEFAULT_OUTPUT_FILE = "result.txt"
    
    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    
    # Status messages
    SAVED_MESSAGE = "Paginated document has been saved to {}"
    ERROR_MESSAGE = "Error: {}"
