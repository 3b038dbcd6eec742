"""Tooling for the lecture notes of the course "Error control in scientific modeling"."""

__version__ = "0.1.0"
