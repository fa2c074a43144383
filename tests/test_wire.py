import pytest
import serial

from conftest import FakeTransport
from spi_driver.core.transport import SerialTransport
from spi_driver.core.wire import read_exact
from spi_driver.errors import NotConnectedError, TransportError


def test_read_exact_one_byte_per_call():
    transport = FakeTransport(script=b"hello", max_read=1, is_open=True)
    buffer = bytearray(5)

    assert read_exact(transport, buffer, 0, 5) == 5

    assert buffer == b"hello"
    assert transport.read_calls == 5


def test_read_exact_respects_offset():
    transport = FakeTransport(script=b"xyz", max_read=2, is_open=True)
    buffer = bytearray(b"......")

    read_exact(transport, buffer, 2, 3)

    assert buffer == b"..xyz."
    assert transport.read_calls == 2


def test_read_exact_zero_count_does_not_read():
    transport = FakeTransport(is_open=True)
    assert read_exact(transport, bytearray(4), 0, 0) == 0
    assert transport.read_calls == 0


def test_read_exact_timeout_raises():
    transport = FakeTransport(script=b"ab", is_open=True)
    buffer = bytearray(4)

    with pytest.raises(TransportError, match="2 of 4"):
        read_exact(transport, buffer, 0, 4)
    assert buffer[:2] == b"ab"


def test_read_exact_wraps_os_error():
    class Broken(FakeTransport):
        def read(self, buffer):
            raise OSError("device unplugged")

    with pytest.raises(TransportError) as info:
        read_exact(Broken(is_open=True), bytearray(1), 0, 1)
    assert isinstance(info.value.__cause__, OSError)


# ---------------------------------------------------------------------------
# SerialTransport nad pyserial
# ---------------------------------------------------------------------------

def test_serial_transport_is_created_closed():
    transport = SerialTransport("/dev/does-not-exist", read_timeout=0.5, write_timeout=0.25)

    assert not transport.is_open
    assert transport.port == "/dev/does-not-exist"
    assert transport.read_timeout == 0.5
    assert transport.write_timeout == 0.25


def test_serial_transport_open_failure_is_transport_error():
    transport = SerialTransport("/dev/does-not-exist")
    with pytest.raises(TransportError):
        transport.open()


def test_serial_transport_io_requires_open():
    transport = SerialTransport("/dev/does-not-exist")
    with pytest.raises(NotConnectedError):
        transport.write(b"?")
    with pytest.raises(NotConnectedError):
        transport.read(bytearray(1))


def test_serial_transport_timeouts_are_settable():
    transport = SerialTransport("/dev/does-not-exist")
    transport.read_timeout = 1.5
    transport.write_timeout = None
    assert transport.read_timeout == 1.5
    assert transport.write_timeout is None


def test_serial_transport_loopback_read_exact():
    transport = SerialTransport("/dev/does-not-exist")
    transport._ser = serial.serial_for_url("loop://", timeout=0.2)

    transport.write(b"\x01\x02\x03")
    buffer = bytearray(3)
    read_exact(transport, buffer, 0, 3)
    assert buffer == b"\x01\x02\x03"

    with pytest.raises(TransportError):
        read_exact(transport, buffer, 0, 1)

    transport.close()
    assert not transport.is_open
