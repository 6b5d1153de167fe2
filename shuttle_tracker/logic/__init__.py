"""Pure display and ranking helpers."""
