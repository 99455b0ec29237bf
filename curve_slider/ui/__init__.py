"""Qt widgets for the curve slider."""
