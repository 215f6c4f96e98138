"""Infrastructure layer for ThinkInk."""
