"""
stream.py – Urządzenie jako strumień bajtów
============================================
DataStream pozwala użyć Device wszędzie tam, gdzie oczekiwany jest obiekt
plikopodobny (io.BufferedReader, shutil.copyfileobj …). Odczyt i zapis są
przekazywane wprost do Device.read / Device.write; strumień nie obsługuje
pozycji ani przewijania.
"""

import io


class DataStream(io.RawIOBase):
    """Strumień surowych bajtów SPI oparty na Device."""

    def __init__(self, device):
        super().__init__()
        self._device = device

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        return self._device.read(b, 0, len(memoryview(b).cast("B")))

    def write(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        return self._device.write(b)
