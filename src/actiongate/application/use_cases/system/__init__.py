"""System actions."""
