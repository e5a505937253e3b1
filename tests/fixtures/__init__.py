"""Static test fixtures (sample configuration and player data)."""
