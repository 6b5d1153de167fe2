"""Backend access, polling and stop state."""
