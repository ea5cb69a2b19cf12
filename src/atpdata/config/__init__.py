"""Configuration helpers for pipeline runs and tennis domain tables."""

from .settings import DEFAULT_BASE_URL, DEFAULT_OUT_DIR, PipelineSettings
from .tennis import LEVEL_LABELS, ROUND_ORDER, SURFACES

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_OUT_DIR",
    "LEVEL_LABELS",
    "PipelineSettings",
    "ROUND_ORDER",
    "SURFACES",
]
