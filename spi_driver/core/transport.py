"""
transport.py – Niskopoziomowy transport: port szeregowy (pyserial)
===================================================================
Odpowiada za:
  • konfigurację portu (baud, 8N1, timeouty odczytu i zapisu)
  • otwarcie / zamknięcie portu
  • pojedynczy zapis bufora i pojedynczy (częściowy) odczyt

Warstwa nic nie wie o znaczeniu bajtów – to zadanie modułów protocol/.
Częściowe odczyty są normalne; dokładną liczbę bajtów gwarantuje
core.wire.read_exact().
"""

import logging

import serial

from ..constants import DEFAULT_BAUDRATE, DEFAULT_READ_TIMEOUT, DEFAULT_WRITE_TIMEOUT
from ..errors import NotConnectedError, TransportError

logger = logging.getLogger(__name__)


class SerialTransport:
    """
    Dwukierunkowe łącze bajtowe na porcie szeregowym.

    Parametry
    ----------
    port : str
        Nazwa portu (np. "/dev/ttyUSB0", "COM3").
    baudrate : int
        Prędkość łącza (domyślnie 460800).
    read_timeout : float | None
        Timeout pojedynczego odczytu [s]. None = blokuj bez limitu.
    write_timeout : float | None
        Timeout zapisu [s]. None = blokuj bez limitu.

    Przykład
    --------
    transport = SerialTransport("/dev/ttyUSB0")
    transport.open()
    transport.write(b"?")
    transport.close()
    """

    def __init__(
        self,
        port:          str,
        baudrate:      int = DEFAULT_BAUDRATE,
        read_timeout:  float | None = DEFAULT_READ_TIMEOUT,
        write_timeout: float | None = DEFAULT_WRITE_TIMEOUT,
    ):
        # Port tworzony bez nazwy, więc konstruktor go nie otwiera
        self._ser = serial.Serial()
        self._ser.port          = port
        self._ser.baudrate      = baudrate
        self._ser.bytesize      = serial.EIGHTBITS
        self._ser.parity        = serial.PARITY_NONE
        self._ser.stopbits      = serial.STOPBITS_ONE
        self._ser.timeout       = read_timeout
        self._ser.write_timeout = write_timeout

    # ------------------------------------------------------------------
    # Otwarcie / zamknięcie
    # ------------------------------------------------------------------

    @property
    def port(self) -> str:
        return self._ser.port

    @property
    def is_open(self) -> bool:
        return self._ser.is_open

    def open(self) -> None:
        """Otwiera port. Błąd systemu zamieniany jest na TransportError."""
        logger.info("Otwieranie portu %s (%d baud)", self.port, self._ser.baudrate)
        try:
            self._ser.open()
        except (serial.SerialException, OSError) as exc:
            raise TransportError(f"cannot open {self.port}: {exc}") from exc

    def close(self) -> None:
        """Zamyka port (bezpieczne przy wielokrotnym wywołaniu)."""
        if self._ser.is_open:
            self._ser.close()
            logger.info("Port %s zamknięty", self.port)

    # ------------------------------------------------------------------
    # Timeouty
    # ------------------------------------------------------------------

    @property
    def read_timeout(self) -> float | None:
        return self._ser.timeout

    @read_timeout.setter
    def read_timeout(self, value: float | None) -> None:
        self._ser.timeout = value

    @property
    def write_timeout(self) -> float | None:
        return self._ser.write_timeout

    @write_timeout.setter
    def write_timeout(self, value: float | None) -> None:
        self._ser.write_timeout = value

    # ------------------------------------------------------------------
    # Transfer danych
    # ------------------------------------------------------------------

    def write(self, data) -> None:
        """
        Zapisuje cały bufor w jednym wywołaniu.

        Parametry
        ----------
        data : bytes-like
            Bajty do wysłania.
        """
        self._require_open()
        try:
            self._ser.write(data)
        except (serial.SerialException, OSError) as exc:
            raise TransportError(f"write failed on {self.port}: {exc}") from exc

    def read(self, buffer) -> int:
        """
        Odczytuje co najwyżej len(buffer) bajtów do ``buffer``.

        Zwraca
        ------
        int
            Liczba odczytanych bajtów. 0 oznacza upływ read_timeout.
        """
        self._require_open()
        try:
            return self._ser.readinto(buffer)
        except (serial.SerialException, OSError) as exc:
            raise TransportError(f"read failed on {self.port}: {exc}") from exc

    def _require_open(self) -> None:
        if not self._ser.is_open:
            raise NotConnectedError(f"serial port {self.port} is not open")

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"SerialTransport({self.port!r}, {state})"
