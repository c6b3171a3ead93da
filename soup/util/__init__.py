"""Utility helpers for the simulation."""
