import struct

from blink_twenty.audio import generate_chime_wav_bytes, Chime


def test_chime_is_a_mono_16bit_wav() -> None:
    wav = generate_chime_wav_bytes(notes_hz=(440.0, 880.0), note_sec=0.01, sample_rate=8000)

    riff, riff_size, wave = struct.unpack("<4sI4s", wav[:12])
    assert (riff, wave) == (b"RIFF", b"WAVE")
    assert riff_size == len(wav) - 8

    channels, rate = struct.unpack("<HI", wav[22:28])
    assert (channels, rate) == (1, 8000)

    data_size = struct.unpack("<I", wav[40:44])[0]
    assert data_size == 2 * 2 * 80


def test_volume_is_clamped() -> None:
    loud = generate_chime_wav_bytes(notes_hz=(440.0,), note_sec=0.01, volume=5.0, sample_rate=8000)
    samples = struct.unpack(f"<{(len(loud) - 44) // 2}h", loud[44:])
    assert max(abs(s) for s in samples) <= 32767


def test_chime_play_is_silent_off_windows(monkeypatch) -> None:
    monkeypatch.setattr("blink_twenty.audio.sys.platform", "linux")
    chime = Chime()
    assert not chime.supported
    chime()
