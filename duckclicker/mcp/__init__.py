"""MCP server exposing the duck clicker engine as tools."""
