"""Küçük işletmeler için kârlılık dashboard motoru."""

__version__ = "0.1.0"
