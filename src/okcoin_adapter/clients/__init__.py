"""Exchange API clients."""
