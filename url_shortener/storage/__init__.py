"""Mapping records and the stores that own them."""
