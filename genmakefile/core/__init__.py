"""Core — configuration, domain models and generation services."""
