"""Utility helpers for todorecur."""
