"""User (identity) actions."""
