"""Logging helpers for the wedding planner application."""
