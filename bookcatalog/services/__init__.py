"""Catalog, credential and session services."""
