"""Terminal line editor with incremental search."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "commands",
    "keymaps",
    "modes",
    "runtime",
    "search",
    "session",
    "shell",
]

__version__ = "0.1.0"
