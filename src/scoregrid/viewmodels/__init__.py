"""Viewmodels: the scoreboard dispatcher and store."""
