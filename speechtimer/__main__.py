"""Run a console speech timer: python -m speechtimer [preset name]."""

import logging
import signal
import sys

from PyQt6.QtCore import QCoreApplication

from .audio.sounds import SoundManager
from .database.db import init_db
from .presets import ensure_defaults, find_by_name, get_config, list_configs, save_config
from .settings import Settings, load_settings, save_settings
from .timer.config import PresetType, ThresholdConfig, create_preset
from .timer.engine import SignalState, TimerSession

logger = logging.getLogger("speechtimer")


def _pick_preset(name: str, settings: Settings) -> ThresholdConfig | None:
    if name:
        return find_by_name(name)
    if settings.last_preset_id:
        config = get_config(settings.last_preset_id)
        if config is not None:
            return config
    stored = list_configs()
    return stored[0] if stored else create_preset(PresetType.CUSTOM)


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    init_db()
    ensure_defaults()

    config = _pick_preset(" ".join(args), settings)
    if config is None:
        names = ", ".join(c.name for c in list_configs())
        logger.error("No preset named %r (available: %s)", " ".join(args), names)
        sys.exit(1)

    app = QCoreApplication(sys.argv)
    app.setApplicationName("SpeechTimer")
    signal.signal(signal.SIGINT, signal.SIG_DFL)  # Ctrl-C quits the Qt loop

    session = TimerSession(tick_interval_ms=settings.tick_interval_ms)
    session.set_config(config)
    save_config(config)
    settings.last_preset_id = config.id
    save_settings(settings)

    sounds = SoundManager(parent=app)
    sounds.set_enabled(settings.sound_enabled)
    sounds.set_volume(settings.sound_volume)
    sounds.connect_session(session)

    def _show(state: SignalState) -> None:
        at = session.duration_between(SignalState.START, state)
        seconds = int(at.total_seconds()) if at is not None else session.elapsed_seconds()
        print(f"[{seconds // 60:02d}:{seconds % 60:02d}] {state.value.upper()}")
        if state == SignalState.FINISH:
            app.quit()

    session.state_changed.connect(_show)

    finish = f"{config.finish_time}s" if config.finish_time else "none"
    print(
        f"{config.name}: green {config.green_time}s, orange {config.orange_time}s, "
        f"red {config.red_time}s, finish {finish}"
    )
    session.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
