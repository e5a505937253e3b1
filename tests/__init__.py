"""Test suite for player_screener."""
