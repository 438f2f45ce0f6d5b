import sys
import math
import struct
import threading

from .config import (
    CHIME_NOTES_HZ,
    CHIME_NOTE_SEC,
    CHIME_VOLUME,
    SAMPLE_RATE,
)


def _wrap_wav_header(pcm_data: bytes, sample_rate: int) -> bytes:
    data_size = len(pcm_data)
    riff_size = 36 + data_size
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        riff_size,
        b"WAVE",
        b"fmt ",
        16,
        1,
        1,
        sample_rate,
        sample_rate * 2,
        2,
        16,
        b"data",
        data_size,
    )
    return header + pcm_data


def generate_chime_wav_bytes(
    notes_hz=CHIME_NOTES_HZ,
    note_sec: float = CHIME_NOTE_SEC,
    volume: float = CHIME_VOLUME,
    sample_rate: int = SAMPLE_RATE,
) -> bytes:
    volume = max(0.0, min(1.0, float(volume)))
    max_amp = int(32767 * volume)
    n_samples = max(1, int(sample_rate * note_sec))

    frames = bytearray()
    for freq in notes_hz:
        for i in range(n_samples):
            t = i / sample_rate
            envelope = 1.0 - (i / n_samples)
            sample = int(max_amp * envelope * math.sin(2.0 * math.pi * freq * t))
            frames += struct.pack("<h", sample)

    return _wrap_wav_header(bytes(frames), sample_rate)


class Chime:
    """Plays the rest chime without blocking the Tk thread (Windows only)."""

    def __init__(self):
        self._wav = generate_chime_wav_bytes()
        self._lock = threading.Lock()

    @property
    def supported(self) -> bool:
        return sys.platform == "win32"

    def play(self) -> None:
        if not self.supported:
            return
        threading.Thread(target=self._play, daemon=True).start()

    def _play(self) -> None:
        import winsound

        with self._lock:
            winsound.PlaySound(self._wav, winsound.SND_MEMORY)

    __call__ = play
