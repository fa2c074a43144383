"""
errors.py – Hierarchia wyjątków biblioteki
===========================================
Każda operacja urządzenia zgłasza wyjątek dziedziczący po SpiDriverError,
więc wywołujący może złapać wszystko jednym ``except``.
"""


class SpiDriverError(Exception):
    """Bazowy wyjątek biblioteki spi_driver."""


class NotConnectedError(SpiDriverError):
    """Operacja wywołana przy zamkniętym porcie szeregowym."""


class ProtocolError(SpiDriverError):
    """Nieprawidłowa odpowiedź urządzenia (echo, tekst statusu)."""


class TransportError(SpiDriverError):
    """Błąd I/O lub przekroczenie timeoutu warstwy transportowej."""


class InvalidArgumentError(SpiDriverError, ValueError):
    """Niepoprawny argument: wyjście, długość ramki, zakres bufora."""
