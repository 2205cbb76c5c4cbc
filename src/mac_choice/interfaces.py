from __future__ import annotations

import logging
import subprocess
from typing import Protocol

import psutil

try:
    from scapy.all import get_if_hwaddr  # type: ignore
except Exception:  # pragma: no cover
    get_if_hwaddr = None  # type: ignore

from .errors import (
    AddressApplyFailed,
    InterfaceDownFailed,
    InterfaceUpFailed,
    InvalidInterfaceName,
)

log = logging.getLogger(__name__)

BACKENDS = ("macchanger", "iproute2")


# -------------------------------------------------
# Interface detection
# -------------------------------------------------

def list_interfaces() -> list[str]:
    """
    Names of the local interfaces, loopback excluded.
    """
    names: list[str] = []
    for name, addrs in psutil.net_if_addrs().items():
        if name == "lo" or name.startswith("lo:"):
            continue
        if any(a.address and a.address.startswith("127.") for a in addrs):
            continue
        names.append(name)
    return names


def validate_interface(name: str, available: list[str] | None = None) -> None:
    if available is None:
        available = list_interfaces()
    if name not in available:
        raise InvalidInterfaceName(name, available)


def current_hwaddr(name: str) -> str | None:
    """
    Best-effort current hardware address, for display only.
    """
    if get_if_hwaddr is None:
        return None
    try:
        return str(get_if_hwaddr(name)).upper()
    except Exception:
        log.debug("could not read hardware address of %s", name, exc_info=True)
        return None


# -------------------------------------------------
# Applying the address
# -------------------------------------------------

class InterfaceApplier(Protocol):
    def set_state(self, name: str, up: bool) -> bool: ...

    def apply_address(self, name: str, address: str) -> bool: ...


class CommandApplier:
    """
    Runs `ip link` for the interface state and either `macchanger -m`
    or `ip link set ... address` for the address itself.
    """

    def __init__(self, backend: str = "macchanger") -> None:
        if backend not in BACKENDS:
            raise ValueError(f"unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}")
        self.backend = backend

    def _run(self, cmd: list[str]) -> bool:
        log.debug("running: %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True)
        except FileNotFoundError:
            log.error("command not found: %s", cmd[0])
            return False
        except subprocess.CalledProcessError as e:
            log.error("command failed: %s (exit %d)", " ".join(cmd), e.returncode)
            return False
        return True

    def set_state(self, name: str, up: bool) -> bool:
        return self._run(["ip", "link", "set", "dev", name, "up" if up else "down"])

    def apply_address(self, name: str, address: str) -> bool:
        if self.backend == "iproute2":
            return self._run(["ip", "link", "set", "dev", name, "address", address])
        return self._run(["macchanger", f"--mac={address}", name])


def change_address(applier: InterfaceApplier, name: str, address: str) -> None:
    """
    down -> apply -> up. Stops at the first failure and leaves the
    interface as it is; nothing is rolled back.
    """
    if not applier.set_state(name, up=False):
        raise InterfaceDownFailed(name)

    if not applier.apply_address(name, address):
        raise AddressApplyFailed(name, address)

    if not applier.set_state(name, up=True):
        raise InterfaceUpFailed(name)

    log.info("%s now uses %s", name, address)
