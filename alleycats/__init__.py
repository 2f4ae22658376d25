"""Alley Cats race-game rules engine."""
