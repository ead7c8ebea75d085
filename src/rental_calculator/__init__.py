"""Rental property investment calculator."""
