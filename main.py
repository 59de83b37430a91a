#!/usr/bin/env python3
"""SpeechTimer — entry point.

Run with:
    python main.py [preset name]
    python -m speechtimer [preset name]
"""

from speechtimer.__main__ import main


if __name__ == "__main__":
    main()
