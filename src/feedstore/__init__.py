"""feedstore - a local store of RSS and Atom feeds."""

__version__ = "0.1.0"
