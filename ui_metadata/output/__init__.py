"""Serialization of assembled documents."""
