"""
spi_driver – Sterownik mostka Serial ↔ SPI
===========================================
Struktura pakietu:
    spi_driver/
    ├── __init__.py          – publiczne API
    ├── constants.py         – opkody, rozmiary ramek, parametry łącza
    ├── errors.py            – hierarchia wyjątków
    ├── model.py             – Output, DeviceStatus
    ├── device.py            – Device: blokada + operacje sync/async
    ├── stream.py            – DataStream (io.RawIOBase)
    ├── shell.py             – interaktywna powłoka
    ├── core/
    │   ├── transport.py     – port szeregowy (pyserial)
    │   ├── wire.py          – read_exact: odczyt dokładnej liczby bajtów
    │   └── handshake.py     – sekwencja startowa + test echo
    ├── protocol/
    │   ├── frame.py         – porcje, headery, komendy
    │   ├── write.py         – ścieżka WRITE
    │   ├── read.py          – ścieżki READ i READ-WRITE
    │   └── status.py        – zapytanie o status i jego dekoder
    └── utils/
        └── log.py           – CommunicationLog (TX/RX dump), setup_logging

Szybki start:
    from spi_driver import Device, Output

    with Device("/dev/ttyUSB0", read_timeout=1.0) as dev:
        dev.connect()
        print(dev.get_status())
        dev.set_output(Output.CHIP_SELECT, True)
        data = dev.transfer(b"\\x9f\\x00\\x00\\x00")
        dev.set_output(Output.CHIP_SELECT, False)
"""

from .device import Device                          # noqa: F401 – główny interfejs
from .model import DeviceStatus, Output             # noqa: F401
from .stream import DataStream                      # noqa: F401
from .errors import (                               # noqa: F401
    SpiDriverError, NotConnectedError, ProtocolError,
    TransportError, InvalidArgumentError,
)
from .utils.log import CommunicationLog             # noqa: F401

__version__ = "1.0.0"
__all__ = [
    "Device", "DeviceStatus", "Output", "DataStream", "CommunicationLog",
    "SpiDriverError", "NotConnectedError", "ProtocolError",
    "TransportError", "InvalidArgumentError",
]
