from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Protocol

from rich.console import Console
from rich.table import Table

from .errors import PatternNotFound, RecordNotFound, RegistryNotFound
from .oui import OUI, RegistryRecord
from .survey import SurveyRecord, matching_records

log = logging.getLogger(__name__)

INTRO = (
    "Generate a randomized mac-address from a selected vendor\n\n"
    "After you press <return>, the survey will be displayed in a pager,\n"
    "prefixed by a line number. When you have chosen your desired entry,\n"
    "quit the pager, and at the next prompt enter its line number,\n"
    "or Ctrl-C to abort."
)
PROMPT = "enter line number of desired entry; Ctrl-C to abort: "
NOT_POSITIVE = "error: response not a positive integer."


@dataclass(frozen=True)
class Selection:
    oui: OUI
    description: str
    record: SurveyRecord | RegistryRecord


class Pager(Protocol):
    def render(self, records: list[SurveyRecord]) -> None: ...

    def read_line(self, prompt: str) -> str: ...

    def error(self, message: str) -> None: ...


def _build_table(records: list[SurveyRecord]) -> Table:
    t = Table(title="mac address survey", show_lines=False)
    t.add_column("#", style="bold", justify="right")
    t.add_column("Interface")
    t.add_column("Type")
    t.add_column("Manufacturer")
    t.add_column("Name")
    t.add_column("Model")
    t.add_column("OUI")
    for r in records:
        t.add_row(
            str(r.line_number),
            r.interface_class,
            r.product_type,
            r.manufacturer,
            r.product_name,
            r.model,
            ":".join(r.vendor_oui),
        )
    return t


class RichPager:
    """
    Browse the survey with rich's pager, then read answers from the console.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, records: list[SurveyRecord]) -> None:
        self.console.print(INTRO)
        self.console.input()
        with self.console.pager(styles=True):
            self.console.print(_build_table(records))

    def read_line(self, prompt: str) -> str:
        return self.console.input(prompt)

    def error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")


def parse_line_number(answer: str) -> int | None:
    answer = answer.strip()
    if not (answer.isascii() and answer.isdigit()):
        return None
    n = int(answer)
    return n if n > 0 else None


def prompt_line_number(pager: Pager) -> int:
    """
    Ask until the answer is a positive integer. KeyboardInterrupt and
    EOFError are left to the caller.
    """
    while True:
        n = parse_line_number(pager.read_line(PROMPT))
        if n is not None:
            return n
        pager.error(NOT_POSITIVE)


def find_record(records: list[SurveyRecord], line_number: int) -> SurveyRecord:
    for r in records:
        if r.line_number == line_number:
            return r
    raise RecordNotFound(line_number, len(records))


# -------------------------------------------------
# Strategies
# -------------------------------------------------

def select_interactive(records: list[SurveyRecord], pager: Pager) -> Selection:
    pager.render(records)
    n = prompt_line_number(pager)
    rec = find_record(records, n)
    log.debug("interactive choice: line %d", n)
    return Selection(oui=rec.vendor_oui, description=rec.describe(), record=rec)


def select_matching(
    records: list[SurveyRecord],
    interface: str,
    search: str,
    rng: random.Random,
) -> Selection:
    """
    Uniformly pick one of the survey lines matching `search`.

    Draw k in [1, matches] and take the k-th match in file order, so a
    given draw always lands on the same record. `interface` is only
    reported back; it does not narrow the matches.
    """
    matches = matching_records(records, search)
    if not matches:
        raise PatternNotFound(search, interface)

    k = rng.randint(1, len(matches))
    rec = matches[k - 1]
    log.debug("%d survey lines match %r, draw %d -> line %d", len(matches), search, k, rec.line_number)
    return Selection(oui=rec.vendor_oui, description=rec.describe(), record=rec)


def select_from_registry(records: list[RegistryRecord], rng: random.Random) -> Selection:
    if not records:
        raise RegistryNotFound()

    k = rng.randint(1, len(records))
    rec = records[k - 1]
    log.debug("oui list draw %d of %d -> %s", k, len(records), rec.line)
    return Selection(oui=rec.oui_octets, description=rec.line, record=rec)
