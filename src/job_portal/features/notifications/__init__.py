"""Application event notifications."""
