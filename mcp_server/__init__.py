"""MCP server exposing assembled UI metadata."""
