"""Discord cogs wiring the career engine to slash commands."""
