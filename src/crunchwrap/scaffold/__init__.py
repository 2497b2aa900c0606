"""Template fetching, placeholder substitution and name validation."""
