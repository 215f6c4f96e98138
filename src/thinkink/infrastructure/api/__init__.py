"""HTTP API for ThinkInk."""
