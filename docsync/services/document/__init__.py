"""Document service helpers."""
