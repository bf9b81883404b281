"""Client catalog and project administration (CLI + web API)."""
__version__ = "0.1.0"
