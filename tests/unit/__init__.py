"""Unit tests for ghkit."""
