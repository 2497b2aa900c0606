"""crunchwrap CLI commands."""
