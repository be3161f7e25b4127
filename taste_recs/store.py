"""
Profile Store
=============

JSON file persistence for a single TasteProfile.

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so readers never see a half-written profile.
update() runs one read-modify-write under a per-store lock; subscribers
are called with the new profile after every successful write.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, List, Optional

from . import config
from .errors import ProfileStoreError
from .profile import TasteProfile

logger = logging.getLogger(__name__)

Subscriber = Callable[[Optional[TasteProfile]], None]


class ProfileStore:
    """File-backed taste profile storage."""

    def __init__(self, path: Optional[str] = None):
        """
        Initialize store.

        Args:
            path: Profile file (defaults to TASTE_RECS_PROFILE_PATH)
        """
        self.path = Path(path or config.PROFILE_PATH)
        self._lock = threading.RLock()
        self._subscribers: List[Subscriber] = []

    def load(self) -> Optional[TasteProfile]:
        """Read the stored profile, or None if nothing is stored yet."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ProfileStoreError(f"Could not read profile at {self.path}: {e}") from e

        try:
            return TasteProfile.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ProfileStoreError(f"Malformed profile at {self.path}: {e}") from e

    def save(self, profile: TasteProfile) -> None:
        """Atomically write the profile and notify subscribers."""
        with self._lock:
            self._write(profile)
        self._notify(profile)

    def clear(self) -> bool:
        """Delete the stored profile. Returns True if one existed."""
        with self._lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                return False
            except OSError as e:
                raise ProfileStoreError(f"Could not delete profile at {self.path}: {e}") from e
        logger.info("Cleared taste profile at %s", self.path)
        self._notify(None)
        return True

    def update(
        self,
        fn: Callable[[Optional[TasteProfile]], Optional[TasteProfile]],
    ) -> Optional[TasteProfile]:
        """
        Single read-modify-write.

        Args:
            fn: Receives the stored profile (or None) and returns the new one.
                Returning None leaves the store untouched.

        Returns:
            Whatever fn returned
        """
        with self._lock:
            updated = fn(self.load())
            if updated is None:
                return None
            self._write(updated)
        self._notify(updated)
        return updated

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _write(self, profile: TasteProfile) -> None:
        payload = json.dumps(profile.to_dict(), indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise ProfileStoreError(f"Could not write profile at {self.path}: {e}") from e
        logger.info("Saved taste profile to %s", self.path)

    def _notify(self, profile: Optional[TasteProfile]) -> None:
        # Runs after a successful write; one failing subscriber does not stop the rest
        for callback in list(self._subscribers):
            try:
                callback(profile)
            except Exception:
                logger.exception("Profile subscriber failed")
