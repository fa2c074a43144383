"""
handshake.py – Nawiązanie połączenia: sekwencja startowa + test echo
=====================================================================
Protokół (po otwarciu portu):

  Host                        Urządzenie
  ────                        ──────────
  64 × '@'      ──────────►   [ustabilizowanie parsera komend]
  'e', 'A'      ──────────►
                ◄──────────   'A'
  'e', '\\r'     ──────────►
                ◄──────────   '\\r'
  'e', '\\n'     ──────────►
                ◄──────────   '\\n'
  'e', 0xFF     ──────────►
                ◄──────────   0xFF

Pierwsze niezgodne echo przerywa procedurę (ProtocolError). Port zostaje
otwarty; ponowienie to po prostu kolejne wywołanie Device.connect().
"""

import logging

from ..constants import PROBE_BYTES
from ..errors import ProtocolError
from ..protocol.frame import build_priming, build_echo
from ..utils.log import CommunicationLog
from .wire import read_exact

logger = logging.getLogger(__name__)


def do_handshake(transport, log: CommunicationLog | None = None) -> None:
    """
    Wysyła sekwencję startową i wykonuje cztery testy echo.

    Parametry
    ----------
    transport : SerialTransport
        Otwarta warstwa transportowa.
    log : CommunicationLog | None
        Opcjonalny obiekt logujący wymianę bajtów.

    Wyjątki
    -------
    ProtocolError
        Urządzenie odesłało inny bajt niż wysłany.
    TransportError
        Błąd I/O lub timeout odczytu.
    """
    priming = build_priming()
    transport.write(priming)
    if log is not None:
        log.add("PRIMING", priming)

    echo = bytearray(1)
    for i, probe in enumerate(PROBE_BYTES, 1):
        cmd = build_echo(probe)
        transport.write(cmd)
        read_exact(transport, echo, 0, 1)
        if log is not None:
            log.add(f"ECHO {i}/{len(PROBE_BYTES)}", cmd, echo)

        if echo[0] != probe:
            logger.warning(
                "Test połączenia %d: wysłano 0x%02X, odebrano 0x%02X", i, probe, echo[0]
            )
            raise ProtocolError("response invalid during connection test")

    logger.debug("Handshake OK")
