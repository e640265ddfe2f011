"""Learning module application layer."""
