"""Domain models for roulette careers."""
