"""Chat data models, server responses, Audio2Face lip-sync playback and raw PCM helpers."""

__version__ = "0.1.0"