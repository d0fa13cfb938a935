"""babylog - versioned caregiving entries and daily stats."""

__version__ = "0.1.0"
