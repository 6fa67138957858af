"""Weather Live upstream gateway."""
