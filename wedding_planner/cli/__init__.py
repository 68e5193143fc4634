"""Command line host for the guest import."""

from .__main__ import main

__all__ = ["main"]
