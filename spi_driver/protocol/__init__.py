"""Ramkowanie i ścieżki transakcji protokołu mostka."""
