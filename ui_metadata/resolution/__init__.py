"""Stateless resolvers shared by the assemblers."""
