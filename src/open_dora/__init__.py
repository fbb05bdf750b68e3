"""Deployment frequency metrics served from an Apache DevLake database."""

__version__ = "0.1.0"
