"""
End-to-end tests for the vmem command line.

Drives vmem.main() with argument lists, the same way the console script
calls it, and checks the file written, stdout, log output and exit code.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import pytest
import vmem
from vmemgen import files
from vmemgen.errors import LogFileError
from vmemgen.log_setup import PACKAGE_LOGGER, setup_logging


HEADER = "@FFFA //Interrupt and Reset Vectors:"


@pytest.fixture
def image(tmp_path):
    p = tmp_path / "test.bin"
    p.write_bytes(bytes([0x00, 0xFF, 0x0A]))
    return p


def _vmem_lines(path):
    return path.read_text(encoding="ascii").splitlines()


# ─── Success paths ─────────────────────

class TestConvert:
    def test_start_addr(self, image, capsys):
        assert vmem.main([str(image), "--start-addr", "0400"]) == 0
        out = image.with_suffix(".vmem")
        assert _vmem_lines(out) == [
            "00",
            "ff",
            "0a",
            HEADER,
            "00 90 //NMI Vector",
            "00 04 //RESET Vector",
            "00 a0 //INTERRUPT Vector",
        ]
        assert f"Finished writing {out}" in capsys.readouterr().out

    def test_default_start_addr(self, image):
        assert vmem.main([str(image)]) == 0
        lines = _vmem_lines(image.with_suffix(".vmem"))
        assert lines[-2] == "00 00 //RESET Vector"

    def test_prefixed_start_addr(self, image):
        assert vmem.main([str(image), "--start-addr", "0x0400"]) == 0
        assert _vmem_lines(image.with_suffix(".vmem"))[-2] == "00 04 //RESET Vector"

    def test_empty_input(self, tmp_path):
        src = tmp_path / "empty.bin"
        src.write_bytes(b"")
        assert vmem.main([str(src)]) == 0
        assert _vmem_lines(tmp_path / "empty.vmem") == [
            HEADER,
            "00 90 //NMI Vector",
            "00 00 //RESET Vector",
            "00 a0 //INTERRUPT Vector",
        ]

    def test_first_dot_naming(self, tmp_path):
        src = tmp_path / "prog.v2.bin"
        src.write_bytes(b"\x01")
        assert vmem.main([str(src)]) == 0
        assert (tmp_path / "prog.vmem").exists()

    def test_explicit_output(self, image, tmp_path):
        out = tmp_path / "rom.mem"
        assert vmem.main([str(image), "-o", str(out)]) == 0
        assert _vmem_lines(out)[0] == "00"
        assert not image.with_suffix(".vmem").exists()

    def test_vector_overrides(self, image):
        assert vmem.main([str(image), "--nmi", "$FE00", "--irq", "C123"]) == 0
        lines = _vmem_lines(image.with_suffix(".vmem"))
        assert lines[-3] == "00 fe //NMI Vector"
        assert lines[-1] == "23 c1 //INTERRUPT Vector"

    def test_stdout(self, image, capsys):
        assert vmem.main([str(image), "--stdout", "--start-addr", "0400"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[:3] == ["00", "ff", "0a"]
        assert "00 04 //RESET Vector" in out
        assert not image.with_suffix(".vmem").exists()

    def test_file_output_goes_through_convert_file(self, image, monkeypatch):
        calls = []
        real = files.convert_file

        def recording(*args, **kwargs):
            calls.append((args, kwargs))
            return real(*args, **kwargs)

        monkeypatch.setattr(files, "convert_file", recording)
        assert vmem.main([str(image), "--start-addr", "0400"]) == 0
        assert len(calls) == 1
        assert calls[0][1]["config"].start_address == 0x0400
        assert image.with_suffix(".vmem").exists()

    def test_log_file(self, image, tmp_path):
        log_path = tmp_path / "logs" / "vmem.log"
        assert vmem.main([str(image), "--log-file", str(log_path)]) == 0
        text = log_path.read_text(encoding="utf-8")
        assert "RESET:  $0000" in text
        assert "Read 3 bytes" in text


# ─── Bad start address ─────────────────────

class TestBadAddress:
    def test_falls_back_with_warning(self, image, caplog):
        with caplog.at_level(logging.WARNING, logger="vmem"):
            assert vmem.main([str(image), "--start-addr", "zzzz"]) == 0
        assert "Unable to convert start address: zzzz" in caplog.text
        assert _vmem_lines(image.with_suffix(".vmem"))[-2] == "00 00 //RESET Vector"

    def test_too_wide_falls_back(self, image, caplog):
        with caplog.at_level(logging.WARNING, logger="vmem"):
            assert vmem.main([str(image), "--start-addr", "12345"]) == 0
        assert "start address" in caplog.text
        assert _vmem_lines(image.with_suffix(".vmem"))[-2] == "00 00 //RESET Vector"

    def test_bad_nmi_falls_back(self, image, caplog):
        with caplog.at_level(logging.WARNING, logger="vmem"):
            assert vmem.main([str(image), "--nmi", "xyz"]) == 0
        assert "Unable to convert NMI vector: xyz" in caplog.text
        assert _vmem_lines(image.with_suffix(".vmem"))[-3] == "00 90 //NMI Vector"


# ─── Failures ─────────────────────

class TestFailures:
    def test_missing_input(self, tmp_path, caplog, capsys):
        missing = tmp_path / "nope.bin"
        with caplog.at_level(logging.ERROR, logger="vmem"):
            assert vmem.main([str(missing)]) == 1
        assert "no such file as" in caplog.text
        assert list(tmp_path.iterdir()) == []
        assert "Finished writing" not in capsys.readouterr().out

    def test_unwritable_output(self, image, tmp_path, caplog):
        out = tmp_path / "no_such_dir" / "x.vmem"
        with caplog.at_level(logging.ERROR, logger="vmem"):
            assert vmem.main([str(image), "-o", str(out)]) == 1
        assert "unable to open output file for writing" in caplog.text
        assert not out.exists()

    def test_underivable_name(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="vmem"):
            assert vmem.main([str(tmp_path) + os.sep]) == 1
        assert "unable to generate output file name" in caplog.text

    def test_unopenable_log_file(self, image, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        log_path = blocker / "sub" / "vmem.log"
        with caplog.at_level(logging.ERROR, logger="vmem"):
            assert vmem.main([str(image), "--log-file", str(log_path)]) == 1
        assert "unable to open log file" in caplog.text
        assert not image.with_suffix(".vmem").exists()

    def test_output_and_stdout_exclusive(self, image, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            vmem.main([str(image), "-o", str(tmp_path / "x.vmem"), "--stdout"])
        assert exc.value.code == 2
        assert "not allowed with argument" in capsys.readouterr().err
        assert not (tmp_path / "x.vmem").exists()

    def test_no_arguments_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            vmem.main([])
        assert exc.value.code == 2
        assert "usage: vmem" in capsys.readouterr().err

    def test_verbose_and_quiet_exclusive(self, image):
        with pytest.raises(SystemExit) as exc:
            vmem.main([str(image), "-v", "-q"])
        assert exc.value.code == 2


# ─── Logging ─────────────────────

def _own_handlers(name):
    return [h for h in logging.getLogger(name).handlers if getattr(h, "_vmem_handler", False)]


class TestLogging:
    def test_quiet_hides_warning_keeps_errors(self, tmp_path, capsys):
        src = tmp_path / "t.bin"
        src.write_bytes(b"\x01")
        assert vmem.main([str(src), "-q", "--start-addr", "zzzz"]) == 0
        err = capsys.readouterr().err
        assert "Unable to convert" not in err

        assert vmem.main([str(tmp_path / "gone.bin"), "-q"]) == 1
        assert "no such file as" in capsys.readouterr().err

    def test_repeated_setup_keeps_one_handler_each(self, tmp_path):
        log_path = tmp_path / "vmem.log"
        for _ in range(3):
            setup_logging("vmem", log_file=log_path)
        for name in ("vmem", PACKAGE_LOGGER):
            handlers = _own_handlers(name)
            kinds = sorted(type(h).__name__ for h in handlers)
            assert kinds == ["FileHandler", "RichHandler"]

        setup_logging("vmem")
        for name in ("vmem", PACKAGE_LOGGER):
            assert [type(h).__name__ for h in _own_handlers(name)] == ["RichHandler"]

    def test_console_kept_when_log_file_fails(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(LogFileError):
            setup_logging("vmem", log_file=blocker / "sub" / "x.log")
        assert [type(h).__name__ for h in _own_handlers("vmem")] == ["RichHandler"]
