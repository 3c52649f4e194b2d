"""Show-control models for audio-reactive LED tubes: messages, timeline, presets and previews."""

__version__ = "0.1.0"