"""
frame.py – Budowanie ramek protokołu mostka
============================================
Transfery blokowe dzielone są na porcje (chunk) o długości 1..64 bajtów.
Każdą porcję poprzedza jednobajtowy header:

   ┌──────────────────────┬──────────┬────────────────┬──────────────────────────┬────────────┐
   │ Operacja             │ Bity     │ Wartość        │ Wysyłane                  │ Odpowiedź  │
   ├──────────────────────┼──────────┼────────────────┼──────────────────────────┼────────────┤
   │ Zapis                │ 11xxxxxx │ 0xC0 + (len-1) │ header + len bajtów danych│ brak       │
   │ Odczyt               │ 10xxxxxx │ 0x80 + (len-1) │ header + len bajtów 0x00  │ len bajtów │
   │ Odczyt-zapis (duplex)│ 10xxxxxx │ 0x80 + (len-1) │ header + len bajtów danych│ len bajtów │
   └──────────────────────┴──────────┴────────────────┴──────────────────────────┴────────────┘

   xxxxxx = len-1 zapisane na 6 bitach, stąd len ∈ [1, 64].

Pozostałe komendy (status, wyjścia, echo, sekwencja startowa) są krótkie
i stałe – ich buildery również znajdują się tutaj.
"""

from ..constants import (
    MAX_CHUNK_SIZE, WRITE_HEADER_BASE, READ_HEADER_BASE, HEADER_LENGTH_MASK,
    READ_FILLER_BYTE, PRIMING_BYTE, PRIMING_LENGTH, ECHO_OPCODE,
    STATUS_OPCODE, OUTPUT_A_OPCODE, OUTPUT_B_OPCODE,
    CS_ASSERT_OPCODE, CS_RELEASE_OPCODE,
)
from ..errors import InvalidArgumentError
from ..model import Output, require_output


# ---------------------------------------------------------------------------
# Podział na porcje
# ---------------------------------------------------------------------------

def iter_chunks(count: int, chunk_size: int = MAX_CHUNK_SIZE):
    """
    Generuje pary (offset, length) dla transferu o długości ``count``.

    offset rośnie od 0 co ``chunk_size``; ostatnia porcja może być krótsza.
    Dla count == 0 nie generuje nic.

    >>> list(iter_chunks(130))
    [(0, 64), (64, 64), (128, 2)]
    """
    if count < 0:
        raise InvalidArgumentError(f"negative transfer length: {count}")
    for offset in range(0, count, chunk_size):
        yield offset, min(chunk_size, count - offset)


def chunk_count(count: int) -> int:
    """Liczba porcji potrzebnych dla ``count`` bajtów (ceil(count / 64))."""
    return -(-count // MAX_CHUNK_SIZE)


# ---------------------------------------------------------------------------
# Headery
# ---------------------------------------------------------------------------

def _check_length(length: int) -> None:
    if not 1 <= length <= MAX_CHUNK_SIZE:
        raise InvalidArgumentError(
            f"chunk length must be in [1, {MAX_CHUNK_SIZE}], got {length}"
        )


def write_header(length: int) -> int:
    """Header porcji zapisu: 0xC0 + (length-1)."""
    _check_length(length)
    return WRITE_HEADER_BASE | ((length - 1) & HEADER_LENGTH_MASK)


def read_header(length: int) -> int:
    """Header porcji odczytu / odczytu-zapisu: 0x80 + (length-1)."""
    _check_length(length)
    return READ_HEADER_BASE | ((length - 1) & HEADER_LENGTH_MASK)


def header_length(header: int) -> int:
    """Odczytuje długość payloadu zakodowaną w headerze."""
    return (header & HEADER_LENGTH_MASK) + 1


def is_write_header(header: int) -> bool:
    return header & WRITE_HEADER_BASE == WRITE_HEADER_BASE


# ---------------------------------------------------------------------------
# Ramki transferów blokowych
# ---------------------------------------------------------------------------

def build_write_chunk(payload) -> bytes:
    """
    Buduje ramkę zapisu: header + payload.

    Parametry
    ----------
    payload : bytes-like
        1..64 bajtów danych.

    Zwraca
    ------
    bytes
        Ramka gotowa do jednego transport.write().
    """
    payload = bytes(payload)
    return bytes([write_header(len(payload))]) + payload


def build_read_chunk(length: int, payload=None) -> bytes:
    """
    Buduje ramkę odczytu (payload=None → wypełnienie zerami) lub
    odczytu-zapisu (payload = bajty wysyłane na MOSI).

    Parametry
    ----------
    length : int
        Długość porcji 1..64.
    payload : bytes-like | None
        Dane wychodzące; musi mieć dokładnie ``length`` bajtów.
    """
    if payload is None:
        payload = bytes([READ_FILLER_BYTE]) * length
    else:
        payload = bytes(payload)
        if len(payload) != length:
            raise InvalidArgumentError(
                f"payload has {len(payload)} bytes, header says {length}"
            )
    return bytes([read_header(length)]) + payload


# ---------------------------------------------------------------------------
# Komendy stałe
# ---------------------------------------------------------------------------

def build_priming() -> bytes:
    """64 bajty '@' – sekwencja startowa przed testem połączenia."""
    return bytes([PRIMING_BYTE]) * PRIMING_LENGTH


def build_echo(probe: int) -> bytes:
    """Komenda echo: [e, probe]. Urządzenie odsyła jeden bajt ``probe``."""
    return bytes([ECHO_OPCODE, probe & 0xFF])


def build_status_query() -> bytes:
    """Zapytanie o status: jeden bajt '?'."""
    return bytes([STATUS_OPCODE])


def build_output_command(output: Output, enable: bool) -> bytes:
    """
    Buduje komendę ustawienia wyjścia.

    A / B       → 2 bajty: [opkod, 1|0]
    CHIP_SELECT → 1 bajt:  's' (aktywacja) lub 'u' (zwolnienie)

    Wyjątki
    -------
    InvalidArgumentError
        ``output`` nie jest członkiem Output.
    """
    output = require_output(output)
    if output is Output.A:
        return bytes([OUTPUT_A_OPCODE, 1 if enable else 0])
    if output is Output.B:
        return bytes([OUTPUT_B_OPCODE, 1 if enable else 0])
    return bytes([CS_ASSERT_OPCODE if enable else CS_RELEASE_OPCODE])
