"""
status.py – Zapytanie o status i dekodowanie odpowiedzi
========================================================
Urządzenie na bajt '?' odsyła dokładnie 80 bajtów tekstu ASCII:

    [model serial uptime voltage current temperature a b cs]

Pola oddzielone pojedynczą spacją, całość w nawiasach kwadratowych.
Firmware dopełnia odpowiedź do 80 bajtów – dopełnienie (spacje / NUL)
za zamykającym nawiasem jest pomijane.

Uwaga: CRC odczytywane jest szesnastkowo z tego samego tokenu co stan
wyjścia A (indeks 6). Bez weryfikacji na prawdziwym firmware nie
zmieniamy indeksu.
"""

import datetime
import logging

from ..constants import (
    STATUS_LENGTH, STATUS_FIELD_COUNT,
    STATUS_OPEN_BRACKET, STATUS_CLOSE_BRACKET,
    FIELD_MODEL, FIELD_SERIAL, FIELD_UPTIME, FIELD_VOLTAGE, FIELD_CURRENT,
    FIELD_TEMPERATURE, FIELD_A, FIELD_B, FIELD_CS, FIELD_CRC,
)
from ..core.wire import read_exact
from ..errors import ProtocolError
from ..model import DeviceStatus
from ..utils.log import CommunicationLog
from .frame import build_status_query

logger = logging.getLogger(__name__)

_PADDING = " \t\r\n\x00"


def _parse_int(token: str, name: str, base: int = 10) -> int:
    try:
        value = int(token, base)
    except ValueError:
        raise ProtocolError(f"status field {name!r} is not an integer: {token!r}") from None
    if value < 0:
        raise ProtocolError(f"status field {name!r} is negative: {token!r}")
    return value


def _parse_float(token: str, name: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise ProtocolError(f"status field {name!r} is not a number: {token!r}") from None


def parse_status(raw) -> DeviceStatus:
    """
    Dekoduje tekst statusu do DeviceStatus.

    Parametry
    ----------
    raw : bytes | str
        Odpowiedź urządzenia (80 bajtów) lub sam tekst.

    Zwraca
    ------
    DeviceStatus
        Niezmienna migawka stanu.

    Wyjątki
    -------
    ProtocolError
        Zła liczba pól, nienumeryczny token lub tekst spoza ASCII.
    """
    if isinstance(raw, str):
        text = raw
    else:
        try:
            text = bytes(raw).decode("ascii")
        except UnicodeDecodeError:
            raise ProtocolError("status response is not ASCII text") from None

    text = text.rstrip(_PADDING)
    if text.startswith(STATUS_OPEN_BRACKET):
        text = text[1:]
    if text.endswith(STATUS_CLOSE_BRACKET):
        text = text[:-1]

    fields = text.split(" ")
    if len(fields) != STATUS_FIELD_COUNT:
        raise ProtocolError(
            f"status has {len(fields)} fields, expected {STATUS_FIELD_COUNT}: {text!r}"
        )

    crc = _parse_int(fields[FIELD_CRC], "crc", 16)
    if crc > 0xFFFF:
        raise ProtocolError(f"status crc out of 16-bit range: {fields[FIELD_CRC]!r}")

    return DeviceStatus(
        model=fields[FIELD_MODEL],
        serial=fields[FIELD_SERIAL],
        uptime=datetime.timedelta(seconds=_parse_int(fields[FIELD_UPTIME], "uptime")),
        voltage=_parse_float(fields[FIELD_VOLTAGE], "voltage"),
        current=_parse_float(fields[FIELD_CURRENT], "current"),
        temperature=_parse_float(fields[FIELD_TEMPERATURE], "temperature"),
        a=_parse_int(fields[FIELD_A], "a") == 1,
        b=_parse_int(fields[FIELD_B], "b") == 1,
        chip_select=_parse_int(fields[FIELD_CS], "cs") == 1,
        crc=crc,
    )


def query_status(transport, *, log: CommunicationLog | None = None) -> DeviceStatus:
    """
    Wysyła '?' i dekoduje 80-bajtową odpowiedź.

    Funkcja zakłada, że wywołujący trzyma blokadę urządzenia.
    """
    query = build_status_query()
    transport.write(query)

    raw = bytearray(STATUS_LENGTH)
    read_exact(transport, raw, 0, STATUS_LENGTH)
    if log is not None:
        log.add("STATUS", query, raw)

    status = parse_status(raw)
    logger.debug("STATUS: %s", status)
    return status
