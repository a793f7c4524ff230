"""Business rules for site administration."""
