"""Streaming scanner for DNS master (zone) files."""
