"""Vendor invoice validation and upsert service."""
