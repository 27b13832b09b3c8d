"""Domain layer for fintrack application."""
