"""Infrastructure layer for the CV management module."""
