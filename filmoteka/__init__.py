"""Filmoteka: role-gated film and actor catalog API."""

__version__ = "1.0.0"
