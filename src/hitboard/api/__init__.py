"""HTTP API for Hitboard."""
