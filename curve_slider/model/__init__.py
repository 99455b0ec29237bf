"""Sample set and position tracking model."""
