"""Progressa utilities."""

from .seed_loader import load_seed, read_seed_document, DEFAULT_SEED_FILE

__all__ = ["load_seed", "read_seed_document", "DEFAULT_SEED_FILE"]
