"""Operational scripts for Hitboard."""
