"""Dry Spell Pricer: parametric consecutive-dry-days insurance pricing."""

__version__ = "0.1.0"
