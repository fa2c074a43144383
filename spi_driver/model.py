"""
model.py – Typy danych: wyjścia urządzenia i migawka statusu
=============================================================
"""

import datetime
import enum
from dataclasses import dataclass

from .errors import InvalidArgumentError


class Output(enum.Enum):
    """Cyfrowe wyjście mostka, którym można sterować."""

    A           = "a"
    B           = "b"
    CHIP_SELECT = "cs"

    @classmethod
    def from_name(cls, name: str) -> "Output":
        """Zwraca wyjście po nazwie ("a", "b", "cs"), bez rozróżniania wielkości liter."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"unknown output: {name!r}") from None


def require_output(pin) -> Output:
    """Sprawdza, że ``pin`` jest członkiem Output – inaczej InvalidArgumentError."""
    if not isinstance(pin, Output):
        raise InvalidArgumentError(f"unsupported output: {pin!r}")
    return pin


@dataclass(frozen=True)
class DeviceStatus:
    """
    Niezmienna migawka stanu urządzenia, zwracana przez zapytanie o status.

    Pola
    ----
    model, serial : str
        Identyfikacja urządzenia.
    uptime : datetime.timedelta
        Czas od włączenia.
    voltage, current, temperature : float
        Zasilanie [V], pobór prądu [A], temperatura [°C].
    a, b, chip_select : bool
        Stan wyjść.
    crc : int
        16-bitowa wartość CRC z tekstu statusu.
    """

    model:       str
    serial:      str
    uptime:      datetime.timedelta
    voltage:     float
    current:     float
    temperature: float
    a:           bool
    b:           bool
    chip_select: bool
    crc:         int

    def output(self, pin: Output) -> bool:
        """Zwraca stan wskazanego wyjścia."""
        pin = require_output(pin)
        if pin is Output.A:
            return self.a
        if pin is Output.B:
            return self.b
        return self.chip_select
