"""Tests for the rawdump command line."""

from rawdump.cli import main

OD_TEXT = "0000000 062550 066154 005157\n0000006\n"


def test_unhexdump_to_file(tmp_path):
    dump = tmp_path / "dump.txt"
    dump.write_text(OD_TEXT)
    out = tmp_path / "out.bin"
    assert main(["unhexdump", str(dump), "--format", "od", "-o", str(out)]) == 0
    assert out.read_bytes() == b"hello\n"


def test_unhexdump_with_yaml_config(tmp_path):
    dump = tmp_path / "dump.txt"
    dump.write_text(OD_TEXT)
    config = tmp_path / "parser.yaml"
    config.write_text("format: od\n")
    out = tmp_path / "out.bin"
    assert main(["unhexdump", str(dump), "--config", str(config), "-o", str(out)]) == 0
    assert out.read_bytes() == b"hello\n"


def test_unhexdump_interpret(tmp_path, capsys):
    dump = tmp_path / "dump.txt"
    dump.write_text(OD_TEXT)
    assert main(["unhexdump", str(dump), "-f", "od", "--interpret", "uint16"]) == 0
    assert capsys.readouterr().out.split() == ["25960", "27756", "2671"]


def test_hexdump(tmp_path, capsys):
    data = tmp_path / "data.bin"
    data.write_bytes(b"hello\n")
    assert main(["hexdump", str(data), "-f", "od"]) == 0
    assert capsys.readouterr().out == OD_TEXT


def test_types(capsys):
    assert main(["types", "--arch", "x86"]) == 0
    out = capsys.readouterr().out
    pointer = next(line for line in out.splitlines() if line.startswith("pointer "))
    assert "4 bytes" in pointer


def test_parse_error_exit_code(tmp_path):
    dump = tmp_path / "bad.txt"
    dump.write_text("zzzz 41\n")
    out = tmp_path / "out.bin"
    assert main(["unhexdump", str(dump), "-o", str(out)]) == 1
    assert not out.exists()


def test_missing_input_exit_code(tmp_path):
    assert main(["hexdump", str(tmp_path / "missing.bin")]) == 1
