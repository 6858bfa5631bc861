"""Unit tests for utility functions (goscaffold.utils).

Tests cover:
- generate_handle (length, alphabet, uniqueness)
- sanitize_name / module_basename
- format_size
- validate_port / check_port_available / find_available_port
- configure_logging
- Rich output helpers
"""

from __future__ import annotations

import logging
import socket

import pytest

from goscaffold.utils import (
    HANDLE_ALPHABET,
    HANDLE_LENGTH,
    check_port_available,
    configure_logging,
    find_available_port,
    format_size,
    generate_handle,
    module_basename,
    print_error,
    print_success,
    print_table,
    print_warning,
    sanitize_name,
    validate_port,
)


# ---------------------------------------------------------------------------
# Handles and names
# ---------------------------------------------------------------------------


class TestGenerateHandle:
    @pytest.mark.unit
    def test_default_length_and_alphabet(self):
        handle = generate_handle()
        assert len(handle) == HANDLE_LENGTH == 12
        assert set(handle) <= set(HANDLE_ALPHABET)

    @pytest.mark.unit
    def test_custom_length(self):
        assert len(generate_handle(5)) == 5

    @pytest.mark.unit
    def test_handles_differ(self):
        handles = {generate_handle() for _ in range(200)}
        assert len(handles) == 200


class TestSanitizeName:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("My Service", "my-service"),
            ("  Shop (v2)  ", "shop-v2"),
            ("already-ok_name", "already-ok_name"),
            ("!!!", ""),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_name(raw) == expected


class TestModuleBasename:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "module_path, expected",
        [
            ("github.com/acme/shop-api", "shop-api"),
            ("github.com/acme/shop/", "shop"),
            ("github.com/acme/shop/v2", "shop"),
            ("example", "example"),
            ("v3", "v3"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_basename(self, module_path, expected):
        assert module_basename(module_path) == expected


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatSize:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "num_bytes, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (2048, "2.0 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024 ** 3, "3.0 GB"),
        ],
    )
    def test_format(self, num_bytes, expected):
        assert format_size(num_bytes) == expected


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


class TestPorts:
    @pytest.mark.unit
    def test_validate_port(self):
        assert validate_port(1024)
        assert validate_port(65535)
        assert not validate_port(80)
        assert not validate_port(70000)

    @pytest.mark.unit
    def test_busy_port_is_unavailable(self):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.bind(("127.0.0.1", 0))
            sock.listen(1)
            port = sock.getsockname()[1]
            assert check_port_available(port, "127.0.0.1") is False
        finally:
            sock.close()

    @pytest.mark.unit
    def test_find_skips_busy_port(self):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.bind(("127.0.0.1", 0))
            sock.listen(1)
            busy = sock.getsockname()[1]
            if busy >= 65535:
                pytest.skip("OS picked the last port")
            port = find_available_port(busy, host="127.0.0.1")
            assert port != busy
            assert check_port_available(port, "127.0.0.1")
        finally:
            sock.close()

    @pytest.mark.unit
    def test_invalid_start_is_replaced(self, monkeypatch: pytest.MonkeyPatch):
        probed: list[int] = []

        def fake_check(port: int, host: str = "") -> bool:
            probed.append(port)
            return True

        monkeypatch.setattr("goscaffold.utils.check_port_available", fake_check)
        assert find_available_port(80) == 8080
        assert probed == [8080]

    @pytest.mark.unit
    def test_falls_back_to_os_assigned_port(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            "goscaffold.utils.check_port_available", lambda port, host="": False
        )
        port = find_available_port(9000, max_attempts=3, host="127.0.0.1")
        assert port > 0
        assert port not in (9000, 9001, 9002)


# ---------------------------------------------------------------------------
# Logging and output
# ---------------------------------------------------------------------------


class TestOutput:
    @pytest.mark.unit
    def test_configure_logging_sets_level(self):
        configure_logging("debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        configure_logging("INFO")
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.unit
    def test_print_helpers(self, capsys):
        print_success("done")
        print_error("broken")
        print_warning("careful")
        print_table(["ID", "Name"], [["api-echo", "Api with Echo router"]], title="Templates")
        out = capsys.readouterr().out
        assert "done" in out
        assert "broken" in out
        assert "careful" in out
        assert "api-echo" in out
