"""External integrations: model providers and logging."""
