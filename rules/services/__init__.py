"""Catalog loading services for phrase rules."""
