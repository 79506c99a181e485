"""Administrative actions for per-action permission overrides."""
