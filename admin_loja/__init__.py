"""Admin Loja: back-office service for the online store catalog."""

__version__ = "1.0.0"
