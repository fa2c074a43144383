"""Narzędzia pomocnicze (logowanie)."""
