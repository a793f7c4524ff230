"""Business rules for the paid-file marketplace."""
