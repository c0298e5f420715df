"""Scene geometry and the scene builder."""
