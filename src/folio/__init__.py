"""Folio: content catalog, explorer and contact relay for a portfolio site."""

__version__ = "0.1.0"
