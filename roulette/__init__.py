"""Pokémon Roulette: a Discord career game driven by weighted spins."""
