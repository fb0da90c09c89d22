"""UI data-dictionary metadata assembly engine."""

__version__ = '1.0.0'
