"""Abroad: travel pins with carbon-footprint accounting and eco scoring."""

__version__ = "0.1.0"
