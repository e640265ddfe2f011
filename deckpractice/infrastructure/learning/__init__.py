"""Learning module infrastructure."""
