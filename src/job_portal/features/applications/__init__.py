"""Job applications and their status lifecycle."""
