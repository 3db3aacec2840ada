from __future__ import annotations

from unittest.mock import patch

import pytest

from lockstep.utils.archinfo import host


@pytest.mark.unit
class TestHost:
    """Tests for host architecture detection."""

    @pytest.mark.parametrize(
        "system,machine,expected",
        [
            ("Linux", "x86_64", "os.linux.x86_64"),
            ("Linux", "aarch64", "os.linux.arm64"),
            ("Darwin", "arm64", "os.osx.arm64"),
            ("Windows", "AMD64", "os.windows.x86_64"),
            ("Linux", "i686", "os.linux.x86_32"),
        ],
    )
    def test_known_platforms(self, system: str, machine: str, expected: str) -> None:
        assert host(system, machine) == expected

    def test_unknown_names_pass_through(self) -> None:
        assert host("FreeBSD", "riscv64") == "os.freebsd.riscv64"

    def test_detects_running_platform(self) -> None:
        with patch("lockstep.utils.archinfo.platform.system", return_value="Linux"), patch(
            "lockstep.utils.archinfo.platform.machine", return_value="x86_64"
        ):
            assert host() == "os.linux.x86_64"
