"""Core data structures: genome, mapping, colors, validation."""
