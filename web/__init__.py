"""Flask JSON interface for UI metadata."""
