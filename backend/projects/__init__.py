"""Stored pipeline projects behind the ProjectStore port."""
