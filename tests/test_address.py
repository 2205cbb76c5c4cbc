import random

from mac_choice.address import GeneratedAddress, assemble


def test_suffix_appended_upper_case(scripted):
    addr = assemble(("aa", "bb", "cc"), scripted(bytes_=[16, 32, 48]))
    assert str(addr) == "AA:BB:CC:10:20:30"
    assert addr.prefix == ("AA", "BB", "CC")


def test_null_address_is_replaced(scripted):
    addr = assemble(("00", "00", "00"), scripted(bytes_=[0, 0, 0]))
    assert str(addr) == "00:00:00:00:00:01"


def test_only_null_address_is_corrected(scripted):
    assert str(assemble(("00", "00", "00"), scripted(bytes_=[0, 0, 1]))) == "00:00:00:00:00:01"
    assert str(assemble(("00", "00", "00"), scripted(bytes_=[0, 1, 0]))) == "00:00:00:00:01:00"
    assert str(assemble(("00", "26", "5E"), scripted(bytes_=[0, 0, 0]))) == "00:26:5E:00:00:00"


def test_prefix_kept_for_any_draw():
    rng = random.Random(1)
    for _ in range(200):
        addr = assemble(("3C", "97", "0E"), rng)
        parts = str(addr).split(":")
        assert parts[:3] == ["3C", "97", "0E"]
        assert all(len(p) == 2 and int(p, 16) < 256 for p in parts[3:])


def test_locally_administered_prefix_warns_but_is_kept(scripted, caplog):
    addr = assemble(("02", "00", "00"), scripted(bytes_=[1, 2, 3]))
    assert str(addr) == "02:00:00:01:02:03"
    assert "locally administered" in caplog.text


def test_str():
    assert str(GeneratedAddress(("00", "03", "93"), ("0A", "0B", "0C"))) == "00:03:93:0A:0B:0C"
