"""Rendering engine: listing logic, Jinja2 filters and templates."""
