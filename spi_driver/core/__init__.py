"""Warstwa łącza: transport szeregowy, odczyt dokładny, handshake."""
