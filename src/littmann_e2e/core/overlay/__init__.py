"""Transient overlay handling.

This module dismisses interstitial UI such as cookie consent banners
whenever it appears during a page visit.
"""

from __future__ import annotations

from .watcher import OverlayWatcher

__all__ = ["OverlayWatcher"]
