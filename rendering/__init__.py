"""Pygame rendering for the molecular soup."""
