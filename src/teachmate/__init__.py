"""Teachmate - teacher assistant workflow with grounded knowledge lookups."""
