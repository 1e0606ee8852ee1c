"""GUI styling."""
