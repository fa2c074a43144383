"""
read.py – Ścieżki READ i READ-WRITE (SPI → Host)
=================================================
Sekwencja dla każdej porcji (maks. 64 bajty):

  1. Header + dane   Host wysyła [0x80 + len-1] + len bajtów
                     (zera przy czystym odczycie, dane przy duplexie)
  2. Odpowiedź       Host odbiera dokładnie len bajtów (read_exact)

Odczyt porcji zaczyna się dopiero po zakończeniu jej zapisu – ramkowanie
jest half-duplex na poziomie porcji, choć sama transakcja SPI jest
full-duplex. Funkcje zakładają, że wywołujący trzyma blokadę urządzenia.
"""

import logging

from .frame import build_read_chunk, iter_chunks
from ..core.wire import read_exact
from ..utils.log import CommunicationLog

logger = logging.getLogger(__name__)


def read_write_chunks(
    transport,
    in_buffer,
    in_offset:  int,
    out_buffer,
    out_offset: int,
    count:      int,
    *,
    log: CommunicationLog | None = None,
) -> int:
    """
    Transfer full-duplex: wysyła ``out_buffer[out_offset:]`` i zapisuje
    odebrane bajty do ``in_buffer[in_offset:]``.

    Parametry
    ----------
    transport : SerialTransport
        Warstwa transportowa (write + read).
    in_buffer : bytearray | memoryview
        Bufor na dane przychodzące (zapisywalny).
    in_offset : int
        Pozycja w in_buffer.
    out_buffer : bytes-like | None
        Dane wychodzące. None → czysty odczyt (wypełnienie zerami).
    out_offset : int
        Pozycja w out_buffer.
    count : int
        Liczba bajtów transferu. 0 → brak I/O.
    log : CommunicationLog | None
        Opcjonalny obiekt logujący.

    Zwraca
    ------
    int
        Liczba przetransferowanych bajtów (== count).
    """
    out_view = memoryview(out_buffer).cast("B") if out_buffer is not None else None
    in_view  = memoryview(in_buffer).cast("B")

    for i, length in iter_chunks(count):
        payload = None
        if out_view is not None:
            start = out_offset + i
            payload = out_view[start:start + length]
        frame = build_read_chunk(length, payload)
        transport.write(frame)

        dest = in_offset + i
        read_exact(transport, in_view, dest, length)
        if log is not None:
            log.add(f"READ {length}B @ {i}", frame, in_view[dest:dest + length])

    logger.debug("READ-WRITE: %d B", count)
    return count


def read_chunks(
    transport,
    buffer,
    offset: int,
    count:  int,
    *,
    log: CommunicationLog | None = None,
) -> int:
    """
    Czysty odczyt ``count`` bajtów do ``buffer[offset:]``.

    To ścieżka READ-WRITE z zerowym payloadem wychodzącym.
    """
    return read_write_chunks(transport, buffer, offset, None, 0, count, log=log)
