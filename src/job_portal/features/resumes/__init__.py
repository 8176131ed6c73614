"""Resume uploads."""
