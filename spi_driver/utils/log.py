"""
log.py – Logowanie wymiany bajtów TX / RX
==========================================
CommunicationLog gromadzi wszystkie zapisy i odczyty portu z danej sesji
(np. jednego connect() albo jednego transferu) i umożliwia ich czytelne
wyświetlenie.

Przekazywany opcjonalnie do każdej funkcji protokołu (write_chunks,
read_chunks, do_handshake, query_status …). Dodatkowo setup_logging()
konfiguruje standardowy moduł logging dla powłoki.
"""

import logging

_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int = logging.INFO, name: str = "spi_driver") -> logging.Logger:
    """
    Dodaje handler konsolowy do loggera pakietu (tylko raz).

    Parametry
    ----------
    level : int
        Poziom logowania, np. logging.DEBUG przy --verbose.
    name : str
        Nazwa loggera (domyślnie logger całego pakietu).
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not any(getattr(h, "_spi_driver", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FMT))
        handler._spi_driver = True
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def hex_bytes(data) -> str:
    """Formatuje bajty jako 'AA-BB-CC'."""
    return "-".join(f"{b:02X}" for b in bytes(data))


class CommunicationLog:
    """
    Kontener transakcji portu z możliwością wydruku przepływu komunikacji.

    Przykład użycia:
        log = CommunicationLog()
        device.write(b"\\x01\\x02", log=log)
        log.print_flow()
    """

    def __init__(self):
        self._entries: list[dict] = []

    def add(self, step: str, tx: bytes = b"", rx: bytes = b"") -> None:
        """
        Dodaje wpis do logu.

        Parametry
        ----------
        step : str
            Opis kroku (np. "WRITE chunk 1/2").
        tx : bytes
            Bajty wysłane do urządzenia.
        rx : bytes
            Bajty odebrane z urządzenia.
        """
        self._entries.append({
            "step": step,
            "tx":   bytes(tx),
            "rx":   bytes(rx),
        })

    def clear(self) -> None:
        """Czyści wszystkie zapisane wpisy."""
        self._entries.clear()

    def print_flow(self, printer=print) -> None:
        """
        Drukuje czytelny dump całej wymiany bajtów.

        Parametry
        ----------
        printer : callable
            Funkcja drukująca (domyślnie print).
        """
        printer("\n" + "╔" + "═" * 68 + "╗")
        printer("║" + " " * 22 + "FLOW KOMUNIKACJI" + " " * 30 + "║")
        printer("╚" + "═" * 68 + "╝")

        for i, entry in enumerate(self._entries, 1):
            printer(f"\n{'─' * 70}")
            printer(f"  Krok {i}: {entry['step']}")
            printer(f"{'─' * 70}")
            printer(f"  TX (Host→Urządzenie): {hex_bytes(entry['tx']) or '-'}")
            printer(f"  RX (Urządzenie→Host): {hex_bytes(entry['rx']) or '-'}")

        printer("\n" + "=" * 70 + "\n")

    def to_list(self) -> list[dict]:
        """Zwraca kopię listy wpisów (do własnego przetwarzania)."""
        return [dict(e) for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CommunicationLog({len(self._entries)} entries)"
