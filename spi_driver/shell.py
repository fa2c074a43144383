"""
shell.py – Interaktywna powłoka sterująca mostkiem
===================================================
Uruchomienie:
    python -m spi_driver [--port /dev/ttyUSB0] [--read-timeout 1.0] [--verbose]

Komendy:
    connect <port>     – połącz z portem szeregowym
    a|b|cs [on/off]    – przełącz lub ustaw wyjście
    status             – status urządzenia
    writef <path>      – wyślij plik na SPI
    read <count>       – odczytaj bajty z SPI
    close              – zamknij port
    help               – lista komend
    quit | q | exit    – wyjście
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from .device import Device
from .errors import SpiDriverError
from .model import Output
from .utils.log import hex_bytes, setup_logging

HELP_TEXT = (
    "connect <port> - connect to serial port",
    "a [on/off] - toggle or set A output",
    "b [on/off] - toggle or set B output",
    "cs [on/off] - toggle or set CS output",
    "status - get device status",
    "writef <path> - write file to SPI",
    "read <count> - read bytes from SPI",
    "close - close the serial port",
    "quit - leave the shell",
)

_ON_WORDS = ("on", "yes", "1", "true")


class Shell:
    """
    Dyspozytor komend tekstowych nad Device.

    Parametry
    ----------
    device_factory : callable
        Tworzy Device z nazwy portu (domyślnie Device z timeoutami z CLI).
    out, err : file
        Strumienie wyjścia (domyślnie sys.stdout / sys.stderr).
    """

    def __init__(self, device_factory=Device, out=None, err=None):
        self.device_factory = device_factory
        self.device: Device | None = None
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def execute(self, line: str) -> bool:
        """
        Wykonuje jedną linię. Zwraca False, gdy powłoka ma się zakończyć.
        """
        parts = line.strip().split()
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("quit", "q", "exit"):
            return False

        handler = getattr(self, f"do_{cmd}", None)
        if handler is None:
            self._print(f"Unknown command: {cmd} (try 'help')")
            return True

        try:
            handler(args)
        except (SpiDriverError, OSError) as exc:
            print(exc, file=self.err)
        return True

    def _require_device(self) -> Device | None:
        if self.device is None:
            self._print("Not connected to device")
        return self.device

    # ------------------------------------------------------------------
    # Komendy
    # ------------------------------------------------------------------

    def do_help(self, args) -> None:
        for text in HELP_TEXT:
            self._print(text)

    def do_connect(self, args) -> None:
        if not args:
            self._print("connect <port>")
            return
        if self.device is not None:
            self.device.close()
            self.device = None
        device = self.device_factory(args[0])
        try:
            device.connect()
        except SpiDriverError:
            device.close()
            raise
        self.device = device
        self._print("Connected successfully")

    def do_close(self, args) -> None:
        if self._require_device() is None:
            return
        self.device.close()
        self.device = None
        self._print("Closed")

    def _do_output(self, output: Output, args) -> None:
        if self._require_device() is None:
            return
        if not args:
            value = not self.device.get_output(output)
        else:
            value = args[0].lower() in _ON_WORDS
        self.device.set_output(output, value)
        self._print(f"{output.name}: {value}")

    def do_a(self, args) -> None:
        self._do_output(Output.A, args)

    def do_b(self, args) -> None:
        self._do_output(Output.B, args)

    def do_cs(self, args) -> None:
        self._do_output(Output.CHIP_SELECT, args)

    def do_status(self, args) -> None:
        if self._require_device() is None:
            return
        status = self.device.get_status()
        self._print(f"Model: {status.model}")
        self._print(f"Serial Number: {status.serial}")
        self._print(f"Uptime: {status.uptime}")
        self._print(f"Voltage: {status.voltage}V")
        self._print(f"Current: {status.current}A")
        self._print(f"Temperature: {status.temperature}°C")
        self._print(f"A: {status.a}")
        self._print(f"B: {status.b}")
        self._print(f"CS: {status.chip_select}")
        self._print(f"CRC: 0x{status.crc:04x}")

    def do_writef(self, args) -> None:
        if self._require_device() is None:
            return
        if not args:
            self._print("No data in arguments")
            return
        path = Path(" ".join(args))
        if not path.is_file():
            self._print("File does not exist")
            return
        data = path.read_bytes()
        started = time.perf_counter()
        self.device.write(data)
        elapsed = time.perf_counter() - started
        self._print(f"Wrote {len(data)} bytes in {elapsed:.3f}s")

    def do_read(self, args) -> None:
        if self._require_device() is None:
            return
        if not args:
            self._print("No data in arguments")
            return
        try:
            count = int(args[0])
        except ValueError:
            self._print("Invalid count to read")
            return
        if count < 0:
            self._print("Invalid count to read")
            return
        self._print(hex_bytes(self.device.read_bytes(count)))

    def close(self) -> None:
        if self.device is not None:
            self.device.close()
            self.device = None

    def run(self, stdin=None) -> None:
        """Pętla: wczytuj linie aż do 'quit' albo końca wejścia."""
        stdin = stdin if stdin is not None else sys.stdin
        try:
            while True:
                self.out.write("> ")
                self.out.flush()
                line = stdin.readline()
                if not line or not self.execute(line):
                    break
        finally:
            self.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spi-driver",
        description="Interactive shell for the serial-to-SPI bridge.",
    )
    parser.add_argument("--port", help="connect to this serial port on start")
    parser.add_argument("--read-timeout", type=float, default=None,
                        help="read timeout in seconds (default: unbounded)")
    parser.add_argument("--write-timeout", type=float, default=None,
                        help="write timeout in seconds (default: unbounded)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every transaction")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    def factory(port):
        return Device(port, read_timeout=args.read_timeout, write_timeout=args.write_timeout)

    shell = Shell(device_factory=factory)
    if args.port:
        shell.execute(f"connect {args.port}")
    try:
        shell.run()
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
