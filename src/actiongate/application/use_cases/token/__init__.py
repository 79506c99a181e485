"""Token self-service actions."""
