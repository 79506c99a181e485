"""Application layer - ports, dispatcher, action handlers."""
