"""Job postings: listing, detail, owner-scoped writes and cache invalidation."""
