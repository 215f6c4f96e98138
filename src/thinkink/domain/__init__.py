"""Domain layer for ThinkInk."""
