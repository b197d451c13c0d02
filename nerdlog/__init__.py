"""Parts of a terminal log viewer: browser-like and command-line histories, command text helpers and histogram layout."""

__version__ = "0.1.0"