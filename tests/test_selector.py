import pytest

from mac_choice.errors import PatternNotFound, RecordNotFound
from mac_choice.address import assemble
from mac_choice.oui import parse_registry_line
from mac_choice.selector import (
    NOT_POSITIVE,
    parse_line_number,
    prompt_line_number,
    select_from_registry,
    select_interactive,
    select_matching,
)
from mac_choice.survey import load_survey


class ScriptedPager:
    def __init__(self, answers):
        self.answers = list(answers)
        self.rendered = None
        self.errors: list[str] = []
        self.prompts = 0

    def render(self, records):
        self.rendered = records

    def read_line(self, prompt):
        self.prompts += 1
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def error(self, message):
        self.errors.append(message)


@pytest.mark.parametrize("answer", ["", "abc", "0", "00", "-3", "3.5", "+2", "1e3", "²", "٣"])
def test_parse_line_number_rejects(answer):
    assert parse_line_number(answer) is None


def test_parse_line_number_accepts():
    assert parse_line_number(" 12 ") == 12


def test_prompt_repeats_until_positive_integer():
    pager = ScriptedPager(["x", "0", "-1", "", "2"])
    assert prompt_line_number(pager) == 2
    assert pager.prompts == 5
    assert pager.errors == [NOT_POSITIVE] * 4


def test_prompt_interrupt_propagates():
    pager = ScriptedPager(["nope", KeyboardInterrupt()])
    with pytest.raises(KeyboardInterrupt):
        prompt_line_number(pager)


def test_interactive_returns_requested_line(survey_file):
    records = load_survey(survey_file)
    for rec in records:
        pager = ScriptedPager([str(rec.line_number)])
        sel = select_interactive(records, pager)
        assert sel.record is rec
        assert sel.oui == rec.vendor_oui
        assert pager.rendered == records


def test_interactive_end_to_end(survey_file, scripted):
    records = load_survey(survey_file)
    sel = select_interactive(records, ScriptedPager(["3"]))
    assert str(assemble(sel.oui, scripted(bytes_=[16, 32, 48]))) == "AA:BB:CC:10:20:30"


def test_interactive_line_past_end(survey_file):
    records = load_survey(survey_file)
    with pytest.raises(RecordNotFound) as exc:
        select_interactive(records, ScriptedPager(["5"]))
    assert exc.value.exit_code == 9


def test_matching_no_match(survey_file, scripted):
    records = load_survey(survey_file)
    rng = scripted()
    with pytest.raises(PatternNotFound) as exc:
        select_matching(records, "wlan0", "toaster", rng)
    assert exc.value.search == "toaster"
    assert exc.value.interface == "wlan0"
    assert rng.randint_calls == []


def test_matching_each_draw_is_a_distinct_match(survey_file, scripted):
    records = load_survey(survey_file)
    picked = []
    for k in (1, 2, 3):
        rng = scripted(randints=[k])
        sel = select_matching(records, "wlan0", "LAPTOP", rng)
        assert rng.randint_calls == [(1, 3)]
        picked.append(sel.record.line_number)
    assert picked == [1, 3, 4]


def test_matching_same_draw_same_record(survey_file, scripted):
    records = load_survey(survey_file)
    a = select_matching(records, "wlan0", "laptop", scripted(randints=[2]))
    b = select_matching(records, "wlan0", "laptop", scripted(randints=[2]))
    assert a == b
    assert a.description == "laptop Sony Vaio model_#:SVF_13N13_CXB"


def test_interface_token_does_not_filter(survey_file, scripted):
    records = load_survey(survey_file)
    sel = select_matching(records, "wlan0", "lenovo", scripted(randints=[1]))
    assert sel.record.interface_class == "eth"


def test_registry_draw_bounds(registry_lines, scripted):
    records = [parse_registry_line(n, line) for n, line in enumerate(registry_lines, start=1)]
    rng = scripted(randints=[5])
    sel = select_from_registry(records, rng)
    assert rng.randint_calls == [(1, 5)]
    assert sel.record.line_number == 5
    assert sel.oui == ("00", "50", "56")
    assert sel.description == "00 50 56 VMware, Inc."

    sel = select_from_registry(records, scripted(randints=[1]))
    assert sel.record.line_number == 1


def test_prompt_repeats_on_unicode_digits():
    pager = ScriptedPager(["²", "٣", "2"])
    assert prompt_line_number(pager) == 2
    assert pager.errors == [NOT_POSITIVE] * 2
