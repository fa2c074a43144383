import math

import pytest

from spi_driver.errors import InvalidArgumentError
from spi_driver.model import Output
from spi_driver.protocol.frame import (
    build_echo,
    build_output_command,
    build_priming,
    build_read_chunk,
    build_status_query,
    build_write_chunk,
    chunk_count,
    header_length,
    is_write_header,
    iter_chunks,
    read_header,
    write_header,
)


@pytest.mark.parametrize("count", [0, 1, 63, 64, 65, 128, 200])
def test_iter_chunks_covers_count(count):
    chunks = list(iter_chunks(count))

    assert len(chunks) == math.ceil(count / 64) == chunk_count(count)
    assert sum(length for _, length in chunks) == count
    remaining = count
    for offset, length in chunks:
        assert offset == count - remaining
        assert length == min(64, remaining)
        assert 1 <= length <= 64
        remaining -= length


def test_iter_chunks_rejects_negative():
    with pytest.raises(InvalidArgumentError):
        list(iter_chunks(-1))


@pytest.mark.parametrize("length", [1, 2, 32, 63, 64])
def test_header_values(length):
    assert write_header(length) == 0xC0 + length - 1
    assert read_header(length) == 0x80 + length - 1
    assert header_length(write_header(length)) == length
    assert header_length(read_header(length)) == length
    assert is_write_header(write_header(length))
    assert not is_write_header(read_header(length))


def test_header_bounds():
    assert write_header(1) == 0xC0
    assert write_header(64) == 0xFF
    assert read_header(1) == 0x80
    assert read_header(64) == 0xBF


@pytest.mark.parametrize("length", [0, 65, -3])
def test_header_rejects_out_of_range(length):
    with pytest.raises(InvalidArgumentError):
        write_header(length)
    with pytest.raises(InvalidArgumentError):
        read_header(length)


def test_write_chunk_is_header_plus_payload():
    frame = build_write_chunk(b"\x01\x02\x03")
    assert frame == b"\xc2\x01\x02\x03"


def test_read_chunk_pure_read_is_zero_filled():
    frame = build_read_chunk(5)
    assert frame == b"\x84" + b"\x00" * 5


def test_read_chunk_with_payload():
    frame = build_read_chunk(2, memoryview(b"\xaa\x55"))
    assert frame == b"\x81\xaa\x55"


def test_read_chunk_payload_length_mismatch():
    with pytest.raises(InvalidArgumentError):
        build_read_chunk(3, b"\x00")


def test_write_chunk_rejects_empty_and_oversize():
    with pytest.raises(InvalidArgumentError):
        build_write_chunk(b"")
    with pytest.raises(InvalidArgumentError):
        build_write_chunk(bytes(65))


def test_fixed_commands():
    assert build_priming() == b"@" * 64
    assert build_echo(0xFF) == b"e\xff"
    assert build_echo(ord("\r")) == b"e\r"
    assert build_status_query() == b"?"


@pytest.mark.parametrize(
    "output, enable, expected",
    [
        (Output.A, True, b"a\x01"),
        (Output.A, False, b"a\x00"),
        (Output.B, True, b"b\x01"),
        (Output.B, False, b"b\x00"),
        (Output.CHIP_SELECT, True, b"s"),
        (Output.CHIP_SELECT, False, b"u"),
    ],
)
def test_output_commands(output, enable, expected):
    assert build_output_command(output, enable) == expected


@pytest.mark.parametrize("bogus", ["a", 0, None, "CHIP_SELECT"])
def test_output_command_rejects_non_enum(bogus):
    with pytest.raises(InvalidArgumentError):
        build_output_command(bogus, True)
