from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import SurveyNotFound
from .oui import OUI, parse_oui

log = logging.getLogger(__name__)

# index, interface, type, manufacturer, name, model
_DESCRIPTIVE_COLUMNS = 6


@dataclass(frozen=True)
class SurveyRecord:
    line_number: int
    interface_class: str
    product_type: str
    manufacturer: str
    product_name: str
    model: str
    vendor_oui: OUI
    line: str

    def describe(self) -> str:
        return f"{self.product_type} {self.manufacturer} {self.product_name} model_#:{self.model}"


def parse_survey_line(line_number: int, line: str) -> SurveyRecord | None:
    """
    Columns:
      index interface type manufacturer name model OUI

    where OUI is either three octet columns ("00 1A 2B") or a single
    packed column ("00:1A:2B"). The leading index column is informational;
    records are keyed by physical line number.
    """
    parts = line.split()
    if len(parts) not in (_DESCRIPTIVE_COLUMNS + 1, _DESCRIPTIVE_COLUMNS + 3):
        return None

    oui = parse_oui(parts[_DESCRIPTIVE_COLUMNS:])
    if oui is None:
        return None

    _index, interface_class, product_type, manufacturer, product_name, model = parts[:_DESCRIPTIVE_COLUMNS]
    return SurveyRecord(
        line_number=line_number,
        interface_class=interface_class,
        product_type=product_type,
        manufacturer=manufacturer,
        product_name=product_name,
        model=model,
        vendor_oui=oui,
        line=line.rstrip("\n"),
    )


def load_survey(path: str | Path) -> list[SurveyRecord]:
    """
    Returns the survey entries in file order. Blank and '#' lines are
    ignored, malformed lines are skipped with a warning.
    """
    p = Path(path)
    if not p.is_file():
        raise SurveyNotFound(str(p))
    out: list[SurveyRecord] = []
    with p.open(encoding="utf-8", errors="replace") as fh:
        for n, line in enumerate(fh, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            rec = parse_survey_line(n, line)
            if rec is None:
                log.warning("%s:%d: skipping malformed survey entry: %r", p, n, stripped)
                continue
            out.append(rec)
    log.debug("loaded %d survey entries from %s", len(out), p)
    return out


def compile_search(search: str) -> re.Pattern[str]:
    """
    Case-insensitive, grep-like. Strings that aren't valid regular
    expressions are matched literally.
    """
    try:
        return re.compile(search, re.IGNORECASE)
    except re.error:
        log.debug("search %r is not a valid expression, matching literally", search)
        return re.compile(re.escape(search), re.IGNORECASE)


def matching_records(records: list[SurveyRecord], search: str) -> list[SurveyRecord]:
    pattern = compile_search(search)
    return [r for r in records if pattern.search(r.line)]
