"""Render pipeline core."""
