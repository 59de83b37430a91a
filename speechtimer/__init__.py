"""SpeechTimer — green/orange/red signal timer for speeches."""

__version__ = "0.1.0"
