"""Teachmate CLI."""
