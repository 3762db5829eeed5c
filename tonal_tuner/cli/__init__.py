"""Command-line interface for Tonal Tuner."""

from .main import main

__all__ = ["main"]
