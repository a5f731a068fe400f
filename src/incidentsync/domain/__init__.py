"""Domain layer: incident model, feed normalization and reconciliation."""
