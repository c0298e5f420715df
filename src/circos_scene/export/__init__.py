"""Scene export for the rendering widget."""
