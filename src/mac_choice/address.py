from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .oui import OUI, format_oui, is_locally_administered, is_multicast_prefix

log = logging.getLogger(__name__)

NULL_ADDRESS = "00:00:00:00:00:00"


@dataclass(frozen=True)
class GeneratedAddress:
    prefix: OUI
    suffix: tuple[str, str, str]

    def __str__(self) -> str:
        return ":".join(self.prefix + self.suffix)


def random_suffix(rng: random.Random) -> tuple[str, str, str]:
    a, b, c = (f"{rng.randrange(256):02X}" for _ in range(3))
    return a, b, c


def assemble(prefix: OUI, rng: random.Random) -> GeneratedAddress:
    """
    Vendor prefix + three random device octets.

    00:00:00:00:00:00 must never be used, so it becomes 00:00:00:00:00:01.
    FF:FF:FF:FF:FF:FF can't come out of here: FF:FF:FF is never assigned.
    """
    prefix = (prefix[0].upper(), prefix[1].upper(), prefix[2].upper())

    if is_multicast_prefix(prefix):
        log.warning("vendor prefix %s has the multicast (M) bit set", format_oui(prefix))
    if is_locally_administered(prefix):
        log.warning("vendor prefix %s has the locally administered (X) bit set", format_oui(prefix))

    addr = GeneratedAddress(prefix=prefix, suffix=random_suffix(rng))
    if str(addr) == NULL_ADDRESS:
        addr = GeneratedAddress(prefix=prefix, suffix=(addr.suffix[0], addr.suffix[1], "01"))

    log.debug("assembled %s", addr)
    return addr
