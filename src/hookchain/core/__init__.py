"""Shared request/response types and failure types."""
