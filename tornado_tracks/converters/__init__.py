"""Cleaning and derivation of SPC tornado records."""
