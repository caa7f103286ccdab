"""Gloss page generator for classical-text sources."""
