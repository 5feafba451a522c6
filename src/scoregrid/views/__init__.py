"""Qt views for the scoreboard grid (import requires PyQt6)."""
