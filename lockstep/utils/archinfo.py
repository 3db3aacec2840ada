"""
Host architecture detection.

Architectures are dotted identifiers such as ``os.linux.x86_64`` or
``os.osx.arm64``; ``browser`` is the fixed secondary target.
"""

from __future__ import annotations

import platform
from typing import Optional

_SYSTEM_NAMES = {
    "linux": "linux",
    "darwin": "osx",
    "windows": "windows",
}

_MACHINE_NAMES = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "x86_32",
    "i686": "x86_32",
    "aarch64": "arm64",
}


def host(system: Optional[str] = None, machine: Optional[str] = None) -> str:
    """Return the architecture identifier of the running host.

    Args:
        system: Override for ``platform.system()`` (mainly for tests).
        machine: Override for ``platform.machine()``.
    """
    system = (system or platform.system()).lower()
    machine = (machine or platform.machine()).lower()

    os_name = _SYSTEM_NAMES.get(system, system)
    cpu = _MACHINE_NAMES.get(machine, machine)
    return f"os.{os_name}.{cpu}"
