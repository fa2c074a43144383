"""
write.py – Ścieżka WRITE (Host → SPI)
======================================
Sekwencja dla każdej porcji (maks. 64 bajty):

  1. Header + dane   Host wysyła [0xC0 + len-1] + len bajtów
  2. (brak odpowiedzi – urządzenie tylko taktuje MOSI)

Funkcja zakłada, że wywołujący trzyma blokadę urządzenia.
"""

import logging

from .frame import build_write_chunk, iter_chunks
from ..utils.log import CommunicationLog

logger = logging.getLogger(__name__)


def write_chunks(
    transport,
    buffer,
    offset: int,
    count:  int,
    *,
    log: CommunicationLog | None = None,
) -> int:
    """
    Wysyła ``buffer[offset:offset+count]`` porcjami po maks. 64 bajty.

    Parametry
    ----------
    transport : SerialTransport
        Warstwa transportowa z metodą write().
    buffer : bytes-like
        Źródło danych.
    offset : int
        Pozycja pierwszego bajtu w buforze.
    count : int
        Liczba bajtów do wysłania. 0 → brak I/O.
    log : CommunicationLog | None
        Opcjonalny obiekt logujący.

    Zwraca
    ------
    int
        Liczba wysłanych bajtów (== count).
    """
    view = memoryview(buffer).cast("B")
    for i, length in iter_chunks(count):
        start = offset + i
        frame = build_write_chunk(view[start:start + length])
        transport.write(frame)
        if log is not None:
            log.add(f"WRITE {length}B @ {i}", frame)
    logger.debug("WRITE: %d B", count)
    return count
