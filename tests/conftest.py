import threading
import time

import pytest

from spi_driver import Device
from spi_driver.errors import NotConnectedError, TransportError

STATUS_TEXT = "[SPI1 ABC123 3600 5.05 0.12 23.4 1 0 1]"


def pad_status(text: str = STATUS_TEXT) -> bytes:
    """Dopełnia tekst statusu spacjami do 80 bajtów, jak firmware."""
    return text.encode("ascii").ljust(80, b" ")


class FakeTransport:
    """
    Transport testowy zgodny z SerialTransport.

    Każdy write() jest zapisywany; odpowiedzi pochodzą z ``script``
    (bajty doklejane z góry) oraz z ``responder`` (funkcja frame -> bytes,
    wywoływana dla każdego zapisu). ``max_read`` ogranicza liczbę bajtów
    zwracanych przez jeden read(), symulując dane przychodzące porcjami.
    Pusty bufor odpowiedzi oznacza timeout (read() zwraca 0).
    """

    def __init__(self, script=b"", responder=None, max_read=None, is_open=False, delay=0.0):
        self._open = is_open
        self._pending = bytearray(script)
        self.responder = responder
        self.max_read = max_read
        self.delay = delay
        self.read_timeout = None
        self.write_timeout = None
        self.writes: list[bytes] = []
        self.read_calls = 0
        self.events: list[tuple[str, str]] = []
        self.open_calls = 0
        self.fail_write = None
        self._mutex = threading.Lock()

    # -- cykl życia ------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self.open_calls += 1
        self._open = True

    def close(self) -> None:
        self._open = False

    # -- I/O -----------------------------------------------------------

    def feed(self, data: bytes) -> None:
        with self._mutex:
            self._pending += data

    def write(self, data) -> None:
        if not self._open:
            raise NotConnectedError("closed")
        if self.fail_write is not None:
            raise self.fail_write
        frame = bytes(data)
        with self._mutex:
            self.writes.append(frame)
            self.events.append((threading.current_thread().name, "w"))
        if self.delay:
            time.sleep(self.delay)
        if self.responder is not None:
            self.feed(self.responder(frame))

    def read(self, buffer) -> int:
        if not self._open:
            raise NotConnectedError("closed")
        self.read_calls += 1
        view = memoryview(buffer)
        with self._mutex:
            n = min(len(view), len(self._pending))
            if self.max_read is not None:
                n = min(n, self.max_read)
            view[:n] = self._pending[:n]
            del self._pending[:n]
            self.events.append((threading.current_thread().name, "r"))
        return n

    @property
    def wire(self) -> bytes:
        return b"".join(self.writes)


def bridge_responder(status: bytes = None):
    """
    Symulacja firmware: echo, status i pętla MISO = MOSI dla porcji odczytu.
    """
    status = status if status is not None else pad_status()

    def respond(frame: bytes) -> bytes:
        head = frame[0]
        if head == ord("e") and len(frame) == 2:
            return frame[1:2]
        if head == ord("?") and len(frame) == 1:
            return status
        if 0x80 <= head < 0xC0:
            return frame[1:]
        return b""

    return respond


@pytest.fixture
def transport():
    return FakeTransport(responder=bridge_responder(), is_open=True)


@pytest.fixture
def device(transport):
    return Device(transport=transport)
