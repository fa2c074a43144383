import io

import pytest

from conftest import FakeTransport, bridge_responder
from spi_driver import Device
from spi_driver.shell import Shell, build_parser


@pytest.fixture
def transport():
    return FakeTransport(responder=bridge_responder())


@pytest.fixture
def shell(transport):
    ports = []

    def factory(port):
        ports.append(port)
        return Device(transport=transport)

    sh = Shell(device_factory=factory, out=io.StringIO(), err=io.StringIO())
    sh.ports = ports
    return sh


def output(sh) -> str:
    return sh.out.getvalue()


def test_commands_require_connection(shell):
    shell.execute("status")
    shell.execute("a on")
    assert output(shell).count("Not connected to device") == 2


def test_connect_and_status(shell, transport):
    assert shell.execute("connect /dev/ttyUSB0")
    assert shell.ports == ["/dev/ttyUSB0"]
    assert "Connected successfully" in output(shell)

    shell.execute("status")
    text = output(shell)
    assert "Model: SPI1" in text
    assert "Uptime: 1:00:00" in text
    assert "CS: True" in text
    assert "CRC: 0x0001" in text


def test_connect_failure_is_reported(transport, shell):
    transport.responder = None
    shell.execute("connect COM3")
    assert shell.device is None
    assert "read timed out" in shell.err.getvalue()
    assert not transport.is_open


def test_set_and_toggle_outputs(shell, transport):
    shell.execute("connect x")
    transport.writes.clear()

    shell.execute("a on")
    shell.execute("B off")
    shell.execute("cs")  # przełączenie: status mówi CS=1, więc zwolnienie

    assert transport.writes == [b"a\x01", b"b\x00", b"?", b"u"]
    assert "CHIP_SELECT: False" in output(shell)


def test_writef(shell, transport, tmp_path):
    path = tmp_path / "payload.bin"
    path.write_bytes(bytes(100))
    shell.execute("connect x")
    transport.writes.clear()

    shell.execute(f"writef {path}")

    assert [frame[0] for frame in transport.writes] == [0xFF, 0xE3]
    assert "Wrote 100 bytes" in output(shell)


def test_writef_missing_file(shell):
    shell.execute("connect x")
    shell.execute("writef /no/such/file")
    assert "File does not exist" in output(shell)


def test_read_hex_dump(shell, transport):
    shell.execute("connect x")
    shell.execute("read 3")
    assert "00-00-00" in output(shell)

    shell.execute("read many")
    assert "Invalid count to read" in output(shell)


def test_quit_and_unknown(shell):
    assert shell.execute("") is True
    assert shell.execute("frobnicate") is True
    assert "Unknown command" in output(shell)
    assert shell.execute("quit") is False
    assert shell.execute("EXIT") is False


def test_run_loop_closes_device(shell, transport):
    shell.run(io.StringIO("connect x\nhelp\nq\n"))
    assert "connect <port> - connect to serial port" in output(shell)
    assert not transport.is_open


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.port is None
    assert args.read_timeout is None
    assert not args.verbose

    args = build_parser().parse_args(["--port", "COM4", "--read-timeout", "0.5", "-v"])
    assert args.port == "COM4"
    assert args.read_timeout == 0.5
    assert args.verbose
