"""Signal cue synthesis and playback using numpy + QSoundEffect.

Each cue is a single tone generated as a WAV file, with gain falling
exponentially from 0.5 to 0.01 over its length.  Files are cached to disk
so subsequent launches are instant.

Cue names
---------
- ``green``   — 800 Hz sine, 0.5 s
- ``orange``  — 600 Hz triangle, 0.5 s
- ``red``     — 400 Hz sawtooth, 0.8 s
- ``finish``  — 700 Hz sine, 1.0 s
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..timer.engine import SignalState, TimerSession

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "SpeechTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100

START_GAIN = 0.5
END_GAIN = 0.01

# name → (frequency Hz, duration s, waveform)
CUES: dict[str, tuple[float, float, str]] = {
    "green": (800.0, 0.5, "sine"),
    "orange": (600.0, 0.5, "triangle"),
    "red": (400.0, 0.8, "sawtooth"),
    "finish": (700.0, 1.0, "sine"),
}

SOUND_NAMES = tuple(CUES)

_STATE_CUES: dict[SignalState, str] = {
    SignalState.GREEN: "green",
    SignalState.ORANGE: "orange",
    SignalState.RED: "red",
    SignalState.FINISH: "finish",
}


def cue_for_state(state: SignalState) -> str | None:
    """Cue name for *state*; START and BLANK are silent."""
    return _STATE_CUES.get(state)


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _waveform(kind: str, freq: float, duration_s: float) -> np.ndarray:
    """One of ``sine``, ``triangle`` or ``sawtooth`` in -1..1."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    phase = (t * freq) % 1.0
    if kind == "sine":
        return np.sin(2 * np.pi * freq * t)
    if kind == "triangle":
        return 4.0 * np.abs(phase - 0.5) - 1.0
    if kind == "sawtooth":
        return 2.0 * phase - 1.0
    raise ValueError(f"Unknown waveform: {kind}")


def _fade(length: int) -> np.ndarray:
    """Exponential gain ramp from START_GAIN down to END_GAIN."""
    return np.geomspace(START_GAIN, END_GAIN, length)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_cue(name: str) -> bytes:
    """Synthesize the WAV bytes for cue *name*."""
    freq, duration, kind = CUES[name]
    tone = _waveform(kind, freq, duration)
    return _to_wav_bytes(tone * _fade(len(tone)))


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages cue synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.connect_session(session)   # plays a cue on each state change
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def play_for_state(self, state: SignalState) -> None:
        name = cue_for_state(state)
        if name is not None:
            self.play(name)

    def connect_session(self, session: TimerSession) -> None:
        session.state_changed.connect(self.play_for_state)

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate_cue(name))
                logger.debug("Generated cue %s", path)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
