"""Exchange-agnostic models, protocols, exceptions and configuration."""
