"""Renderers for the listing and bundle reports."""
