"""
wire.py – Odczyt dokładnej liczby bajtów z transportu
======================================================
Łącze szeregowe oddaje dane w małych porcjach, więc pojedynczy read()
potrafi zwrócić mniej bajtów niż oczekiwano. read_exact() ponawia odczyt,
aż bufor zostanie wypełniony albo transport zgłosi timeout/błąd.
"""

import logging

from ..errors import TransportError

logger = logging.getLogger(__name__)


def read_exact(transport, buffer, offset: int, count: int) -> int:
    """
    Wypełnia ``buffer[offset:offset+count]`` dokładnie ``count`` bajtami.

    Parametry
    ----------
    transport : SerialTransport
        Obiekt z metodą read(buffer) -> int.
    buffer : bytearray | memoryview
        Bufor docelowy (zapisywalny).
    offset : int
        Pozycja w buforze, od której zapisywane są dane.
    count : int
        Wymagana liczba bajtów.

    Zwraca
    ------
    int
        ``count`` – funkcja nigdy nie wraca z krótszym odczytem.

    Wyjątki
    -------
    TransportError
        Transport zwrócił 0 bajtów (timeout) lub zgłosił błąd I/O.
    """
    view = memoryview(buffer).cast("B")[offset:offset + count]
    received = 0
    while received < count:
        try:
            n = transport.read(view[received:])
        except OSError as exc:
            raise TransportError(f"read failed: {exc}") from exc
        if not n:
            logger.warning("Timeout odczytu: %d/%d bajtów", received, count)
            raise TransportError(
                f"read timed out after {received} of {count} bytes"
            )
        received += n
    return count
