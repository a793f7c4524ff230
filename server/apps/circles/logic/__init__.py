"""Business rules for circles: membership, content and discovery."""
