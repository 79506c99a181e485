"""Built-in actions, registered by ActionRegistry.discover()."""
