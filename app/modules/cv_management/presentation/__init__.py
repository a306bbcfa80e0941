"""Presentation layer for the CV management module."""
