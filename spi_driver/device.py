"""
device.py – Fasada biblioteki: klasa Device
============================================
Device to główny interfejs użytkownika biblioteki spi_driver.
Łączy warstwę transportową (SerialTransport) z logiką protokołu
(do_handshake, query_status, write_chunks, read_write_chunks) i pilnuje,
żeby w danej chwili na łączu była tylko jedna transakcja.

Każda operacja ma wersję blokującą i asynchroniczną (``*_async``).
Wersja asynchroniczna uruchamia tę samą funkcję blokującą w wątku
roboczym (asyncio.to_thread), więc obie korzystają z jednej blokady
i nigdy nie przeplatają bajtów na łączu.

Typowe użycie:
    from spi_driver import Device, Output

    with Device("/dev/ttyUSB0", read_timeout=1.0) as dev:
        dev.connect()
        dev.set_output(Output.CHIP_SELECT, True)
        dev.write(b"\\x9f")
        ident = dev.read_bytes(3)
        dev.set_output(Output.CHIP_SELECT, False)
"""

import asyncio
import logging
import threading

from .constants import DEFAULT_BAUDRATE, DEFAULT_READ_TIMEOUT, DEFAULT_WRITE_TIMEOUT
from .core.handshake import do_handshake
from .core.transport import SerialTransport
from .errors import InvalidArgumentError, NotConnectedError
from .model import DeviceStatus, Output, require_output
from .protocol.frame import build_output_command
from .protocol.read import read_chunks, read_write_chunks
from .protocol.status import query_status
from .protocol.write import write_chunks
from .stream import DataStream
from .utils.log import CommunicationLog

logger = logging.getLogger(__name__)


def _check_range(buffer, offset: int, count: int | None, *, writable: bool, name: str) -> int:
    """Sprawdza zakres bufora i zwraca efektywne ``count``."""
    view = memoryview(buffer)
    if writable and view.readonly:
        raise InvalidArgumentError(f"{name} must be writable (bytearray / memoryview)")
    size = view.nbytes
    if offset < 0 or offset > size:
        raise InvalidArgumentError(f"{name} offset {offset} outside buffer of {size} bytes")
    if count is None:
        count = size - offset
    if count < 0 or offset + count > size:
        raise InvalidArgumentError(
            f"{name} range [{offset}, {offset + count}) outside buffer of {size} bytes"
        )
    return count


class Device:
    """
    Wysokopoziomowy interfejs do mostka Serial ↔ SPI.

    Parametry
    ----------
    port : str | None
        Nazwa portu szeregowego. Pomijana, gdy podano ``transport``.
    baudrate : int
        Prędkość łącza.
    read_timeout : float | None
        Timeout odczytu [s]; None = bez limitu.
    write_timeout : float | None
        Timeout zapisu [s]; None = bez limitu.
    transport : SerialTransport | None
        Gotowy obiekt transportu (open/close/is_open/read/write).
    verbose : bool
        Jeśli True, logger pakietu przechodzi na poziom DEBUG.

    Przykład
    --------
    dev = Device("COM3")
    dev.connect()
    status = dev.get_status()
    dev.close()
    """

    def __init__(
        self,
        port:          str | None = None,
        *,
        baudrate:      int = DEFAULT_BAUDRATE,
        read_timeout:  float | None = DEFAULT_READ_TIMEOUT,
        write_timeout: float | None = DEFAULT_WRITE_TIMEOUT,
        transport=None,
        verbose:       bool = False,
    ):
        if transport is None:
            if port is None:
                raise InvalidArgumentError("either port or transport is required")
            transport = SerialTransport(
                port,
                baudrate=baudrate,
                read_timeout=read_timeout,
                write_timeout=write_timeout,
            )
        self._transport = transport
        self._lock = threading.Lock()
        if verbose:
            logging.getLogger("spi_driver").setLevel(logging.DEBUG)

    # ------------------------------------------------------------------
    # Context manager / cykl życia
    # ------------------------------------------------------------------

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    @property
    def transport(self):
        """Bezpośredni dostęp do warstwy transportowej (zaawansowane użycie)."""
        return self._transport

    @property
    def is_open(self) -> bool:
        return self._transport.is_open

    @property
    def read_timeout(self) -> float | None:
        return self._transport.read_timeout

    @read_timeout.setter
    def read_timeout(self, value: float | None) -> None:
        self._transport.read_timeout = value

    @property
    def write_timeout(self) -> float | None:
        return self._transport.write_timeout

    @write_timeout.setter
    def write_timeout(self, value: float | None) -> None:
        self._transport.write_timeout = value

    def _require_open(self) -> None:
        if not self._transport.is_open:
            raise NotConnectedError("the serial port is not open")

    def connect(self, *, log: CommunicationLog | None = None) -> None:
        """
        Otwiera port (jeśli trzeba) i wykonuje handshake.

        Wyjątki
        -------
        ProtocolError
            Niezgodne echo w teście połączenia – port pozostaje otwarty.
        TransportError
            Błąd otwarcia portu, I/O lub timeout.
        """
        with self._lock:
            if not self._transport.is_open:
                self._transport.open()
            do_handshake(self._transport, log)
        logger.info("Połączono z urządzeniem (%r)", self._transport)

    def close(self) -> None:
        """Zamyka port."""
        self._transport.close()

    def get_stream(self):
        """Zwraca strumień (io.RawIOBase) czytający i piszący przez to urządzenie."""
        return DataStream(self)

    # ------------------------------------------------------------------
    # Status i wyjścia
    # ------------------------------------------------------------------

    def get_status(self, *, log: CommunicationLog | None = None) -> DeviceStatus:
        """Odczytuje i dekoduje 80-bajtowy status urządzenia."""
        self._require_open()
        with self._lock:
            return query_status(self._transport, log=log)

    def get_output(self, output: Output) -> bool:
        """
        Zwraca stan wyjścia. To pełne zapytanie o status, nie tańszy odczyt.
        """
        output = require_output(output)
        return self.get_status().output(output)

    def set_output(
        self,
        output: Output,
        enable: bool,
        *,
        log: CommunicationLog | None = None,
    ) -> None:
        """
        Ustawia wyjście A, B lub CHIP_SELECT. Urządzenie nic nie odsyła.

        Wyjątki
        -------
        InvalidArgumentError
            ``output`` nie jest członkiem Output.
        """
        cmd = build_output_command(output, enable)
        self._require_open()
        with self._lock:
            self._transport.write(cmd)
        if log is not None:
            log.add(f"OUTPUT {output.name}={int(bool(enable))}", cmd)
        logger.debug("OUTPUT %s = %s", output.name, bool(enable))

    # ------------------------------------------------------------------
    # Transfery blokowe
    # ------------------------------------------------------------------

    def write(
        self,
        buffer,
        offset: int = 0,
        count:  int | None = None,
        *,
        log: CommunicationLog | None = None,
    ) -> int:
        """
        Wysyła ``count`` bajtów z ``buffer[offset:]`` na magistralę SPI.

        Parametry
        ----------
        buffer : bytes-like
            Dane do wysłania.
        offset : int
            Pozycja pierwszego bajtu.
        count : int | None
            Liczba bajtów; None = do końca bufora.

        Zwraca
        ------
        int
            Liczba wysłanych bajtów (== count). 0 bez żadnego I/O.
        """
        count = _check_range(buffer, offset, count, writable=False, name="buffer")
        if count == 0:
            return 0
        self._require_open()
        with self._lock:
            return write_chunks(self._transport, buffer, offset, count, log=log)

    def read(
        self,
        buffer,
        offset: int = 0,
        count:  int | None = None,
        *,
        log: CommunicationLog | None = None,
    ) -> int:
        """
        Odczytuje ``count`` bajtów z magistrali SPI do ``buffer[offset:]``.

        Zwraca
        ------
        int
            Liczba odczytanych bajtów (== count). 0 bez żadnego I/O.
        """
        count = _check_range(buffer, offset, count, writable=True, name="buffer")
        if count == 0:
            return 0
        self._require_open()
        with self._lock:
            return read_chunks(self._transport, buffer, offset, count, log=log)

    def read_write(
        self,
        in_buffer,
        in_offset:  int,
        out_buffer,
        out_offset: int,
        count:      int,
        *,
        log: CommunicationLog | None = None,
    ) -> int:
        """
        Transfer full-duplex: wysyła ``out_buffer[out_offset:]`` i jednocześnie
        odbiera tyle samo bajtów do ``in_buffer[in_offset:]``.

        Zwraca
        ------
        int
            Liczba przetransferowanych bajtów (== count).
        """
        count = _check_range(in_buffer, in_offset, count, writable=True, name="in_buffer")
        _check_range(out_buffer, out_offset, count, writable=False, name="out_buffer")
        if count == 0:
            return 0
        self._require_open()
        with self._lock:
            return read_write_chunks(
                self._transport, in_buffer, in_offset, out_buffer, out_offset, count,
                log=log,
            )

    def read_bytes(self, count: int) -> bytes:
        """Odczytuje ``count`` bajtów i zwraca je jako bytes."""
        buffer = bytearray(count)
        self.read(buffer, 0, count)
        return bytes(buffer)

    def transfer(self, data) -> bytes:
        """Wysyła ``data`` full-duplex i zwraca odebrane bajty."""
        data = bytes(data)
        incoming = bytearray(len(data))
        self.read_write(incoming, 0, data, 0, len(data))
        return bytes(incoming)

    # ------------------------------------------------------------------
    # Warianty asynchroniczne
    # ------------------------------------------------------------------

    async def connect_async(self, *, log: CommunicationLog | None = None) -> None:
        await asyncio.to_thread(self.connect, log=log)

    async def get_status_async(self, *, log: CommunicationLog | None = None) -> DeviceStatus:
        return await asyncio.to_thread(self.get_status, log=log)

    async def get_output_async(self, output: Output) -> bool:
        return await asyncio.to_thread(self.get_output, output)

    async def set_output_async(
        self,
        output: Output,
        enable: bool,
        *,
        log: CommunicationLog | None = None,
    ) -> None:
        await asyncio.to_thread(self.set_output, output, enable, log=log)

    async def write_async(self, buffer, offset: int = 0, count: int | None = None, *, log=None) -> int:
        return await asyncio.to_thread(self.write, buffer, offset, count, log=log)

    async def read_async(self, buffer, offset: int = 0, count: int | None = None, *, log=None) -> int:
        return await asyncio.to_thread(self.read, buffer, offset, count, log=log)

    async def read_write_async(
        self,
        in_buffer,
        in_offset:  int,
        out_buffer,
        out_offset: int,
        count:      int,
        *,
        log=None,
    ) -> int:
        return await asyncio.to_thread(
            self.read_write, in_buffer, in_offset, out_buffer, out_offset, count, log=log,
        )

    def __repr__(self) -> str:
        return f"Device({self._transport!r})"
