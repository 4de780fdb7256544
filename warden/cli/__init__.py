"""CLI module for warden."""
