"""Presentation of scan results."""
