"""Domain records and seed data for MedTrack."""

from __future__ import annotations

__all__ = ["model", "seed"]
