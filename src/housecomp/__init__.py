"""housecomp: competition scoring and authoritative winner resolution."""

__version__ = "0.1.0"
