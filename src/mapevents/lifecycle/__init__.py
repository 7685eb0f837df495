"""Data lifecycle tracking.

This package is the single owner of per-resource load state: which
sources, tiles and styles have an announced load that has not yet been
followed by data or an error.
"""

from mapevents.lifecycle.keys import LifecycleKey, LifecycleState
from mapevents.lifecycle.tracker import DataLifecycleTracker

__all__ = ["DataLifecycleTracker", "LifecycleKey", "LifecycleState"]
