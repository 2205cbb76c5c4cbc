from __future__ import annotations

import pytest


class ScriptedRandom:
    """
    Stand-in for random.Random that hands out queued draws.
    """

    def __init__(self, randints=(), bytes_=()):
        self.randints = list(randints)
        self.bytes = list(bytes_)
        self.randint_calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        k = self.randints.pop(0)
        assert a <= k <= b
        return k

    def randrange(self, n: int) -> int:
        v = self.bytes.pop(0)
        assert 0 <= v < n
        return v


SURVEY = """\
1  wlan  laptop  Dell     Inspiron  1545           00 26 5E
2  wlan  tablet  Samsung  Galaxy    SM-T210        E4 E0 C5
3  wlan  laptop  Sony     Vaio      SVF_13N13_CXB  AA BB CC
4  eth   laptop  Lenovo   ThinkPad  T430           3C:97:0E
"""


@pytest.fixture
def survey_file(tmp_path):
    p = tmp_path / "mac_address_survey.output"
    p.write_text(SURVEY, encoding="utf-8")
    return p


@pytest.fixture
def registry_lines():
    return [
        "00 00 00 XEROX CORPORATION",
        "00 00 01 XEROX CORPORATION",
        "00 00 0C Cisco Systems, Inc",
        "00 03 93 Apple, Inc.",
        "00 50 56 VMware, Inc.",
    ]


@pytest.fixture
def scripted():
    return ScriptedRandom
