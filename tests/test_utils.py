from blink_twenty.utils import ms_to_mmss


def test_ms_to_mmss() -> None:
    assert ms_to_mmss(0) == "00:00"
    assert ms_to_mmss(999) == "00:00"
    assert ms_to_mmss(10000) == "00:10"
    assert ms_to_mmss(20 * 60 * 1000) == "20:00"
    assert ms_to_mmss(61500) == "01:01"


def test_ms_to_mmss_clamps_negative() -> None:
    assert ms_to_mmss(-5000) == "00:00"
