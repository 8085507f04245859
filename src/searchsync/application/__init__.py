"""Application – search building, reconciliation and sync dispatch."""
