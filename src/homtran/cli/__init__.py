"""Command line interface for inspecting frame trees."""
