"""Building blocks for category-based logging: buffers, levels, events, pattern specs and context."""

__version__ = "1.2.12"