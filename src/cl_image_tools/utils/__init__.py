"""Shared helpers: media type sniffing and profiling."""
