"""Live shuttle stop tracking for the campus app."""
