from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from manuf import manuf

from .errors import RegistryNotFound

log = logging.getLogger(__name__)

OUI = tuple[str, str, str]

_OCTET = re.compile(r"^[0-9A-Fa-f]{2}$")
_PACKED = re.compile(r"^([0-9A-Fa-f]{2})[:-]?([0-9A-Fa-f]{2})[:-]?([0-9A-Fa-f]{2})$")


def parse_oui(tokens: list[str]) -> OUI | None:
    """
    Accepts either three octet tokens (["00", "1a", "2b"]) or a single
    packed token ("00:1A:2B", "00-1A-2B", "001A2B"). Returns upper case
    octets, or None when the tokens don't spell a 24-bit prefix.
    """
    if len(tokens) == 3 and all(_OCTET.match(t) for t in tokens):
        a, b, c = (t.upper() for t in tokens)
        return a, b, c
    if len(tokens) == 1:
        m = _PACKED.match(tokens[0])
        if m:
            a, b, c = (g.upper() for g in m.groups())
            return a, b, c
    return None


def format_oui(oui: OUI) -> str:
    return ":".join(oui)


def is_multicast_prefix(oui: OUI) -> bool:
    # M bit: least significant bit of the first octet
    return bool(int(oui[0], 16) & 0b00000001)


def is_locally_administered(oui: OUI) -> bool:
    # X bit: second least significant bit of the first octet
    return bool(int(oui[0], 16) & 0b00000010)


# -------------------------------------------------
# Registry records
# -------------------------------------------------

@dataclass(frozen=True)
class RegistryRecord:
    line_number: int
    oui_octets: OUI
    vendor_name: str
    line: str


def parse_registry_line(line_number: int, line: str) -> RegistryRecord | None:
    parts = line.split()
    if not parts:
        return None

    # "AA BB CC Vendor..." or "AA-BB-CC Vendor..."
    oui = parse_oui(parts[:3])
    rest = parts[3:]
    if oui is None:
        oui = parse_oui(parts[:1])
        rest = parts[1:]
    if oui is None:
        return None

    return RegistryRecord(
        line_number=line_number,
        oui_octets=oui,
        vendor_name=" ".join(rest),
        line=line.rstrip("\n"),
    )


def load_registry(path: str | Path) -> list[RegistryRecord]:
    p = Path(path)
    out: list[RegistryRecord] = []
    with p.open(encoding="utf-8", errors="replace") as fh:
        for n, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            rec = parse_registry_line(n, line)
            if rec is None:
                log.warning("%s:%d: skipping malformed oui list entry: %r", p, n, line.strip())
                continue
            out.append(rec)
    log.debug("loaded %d oui entries from %s", len(out), p)
    return out


# -------------------------------------------------
# Registry file resolution
# -------------------------------------------------

class RegistrySource(enum.Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RegistryPaths:
    primary: Path
    fallback: Path


@dataclass(frozen=True)
class RegistryChoice:
    source: RegistrySource
    path: Path
    line_count: int
    other_line_count: int | None = None


def count_lines(path: str | Path) -> int | None:
    """
    Line count of a file (as `wc -l` would report it), None if missing.
    """
    p = Path(path)
    if not p.is_file():
        return None
    with p.open("rb") as fh:
        return sum(1 for _ in fh)


def resolve_registry(
    paths: RegistryPaths,
    line_counter: Callable[[Path], int | None] = count_lines,
) -> RegistryChoice:
    """
    Prefer whichever registry file exists and has more lines.
    The fallback only wins when it is strictly larger.
    """
    primary_count = line_counter(paths.primary)
    fallback_count = line_counter(paths.fallback)

    if primary_count is not None:
        if fallback_count is not None and fallback_count > primary_count:
            log.info(
                "bundled oui list %s is larger than %s (%d vs %d entries)",
                paths.fallback, paths.primary, fallback_count, primary_count,
            )
            return RegistryChoice(
                RegistrySource.FALLBACK, paths.fallback, fallback_count, primary_count
            )
        return RegistryChoice(RegistrySource.PRIMARY, paths.primary, primary_count, fallback_count)

    if fallback_count is not None:
        return RegistryChoice(RegistrySource.FALLBACK, paths.fallback, fallback_count)

    raise RegistryNotFound([str(paths.primary), str(paths.fallback)])


# -------------------------------------------------
# Vendor name lookup
# -------------------------------------------------

class OUILookup:
    """
    Thin wrapper around `manuf` OUI database.
    """

    def __init__(self, parser: manuf.MacParser | None = None) -> None:
        self._parser = parser

    def manufacturer(self, mac: str) -> str | None:
        m = mac.strip().replace("-", ":").upper()

        if self._parser is None:
            self._parser = manuf.MacParser()
        return self._parser.get_manuf_long(m) or self._parser.get_manuf(m)
