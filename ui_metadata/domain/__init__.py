"""Dictionary entity models, enums, and shared constants."""
