"""Remote event handling core: lookup, reconciliation and dispatch."""
