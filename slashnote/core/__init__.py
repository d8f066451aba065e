"""Core slash command engine and its collaborators."""
