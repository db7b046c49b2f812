"""Per-step dynamics: matching, separation and revision."""
