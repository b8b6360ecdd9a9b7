"""Teachmate HTTP API."""
