"""Persistence of explicit captain choices per gameweek."""

import logging
import threading
from pathlib import Path

from .schemas import CaptainsFile
from .utils import load_json, load_json_safe, save_json

logger = logging.getLogger('fplpairs.captains')


class CaptainStore:
    """
    Reads and writes captains.json.

    File layout: ``{"byGw": {"<gw>": {"<team name>": <entry id>}}}``.
    A missing or unreadable file reads as no captains. Writes refuse to
    replace an unreadable file, and write failures propagate to the caller.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, gw: int) -> dict[str, int]:
        """Captains chosen for a gameweek (team name -> entry id)."""
        with self._lock:
            captains = load_json_safe(self.path, default=CaptainsFile(), schema=CaptainsFile)
        return dict(captains.by_gw.get(str(gw), {}))

    def _load_for_update(self) -> CaptainsFile:
        try:
            return load_json(self.path, schema=CaptainsFile)
        except FileNotFoundError:
            return CaptainsFile()

    def set(self, gw: int, selection: dict[str, int], merge: bool = False) -> dict[str, int]:
        """
        Store captains for a gameweek.

        Args:
            gw: Gameweek number
            selection: Team name -> entry id
            merge: Merge into existing choices instead of replacing them

        Returns:
            The gameweek's captains after the write

        Raises:
            ValueError: If the existing file is malformed (it is left untouched)
            OSError: If the file cannot be written
        """
        with self._lock:
            captains = self._load_for_update()
            current = dict(captains.by_gw.get(str(gw), {})) if merge else {}
            current.update(selection)
            captains.by_gw[str(gw)] = current
            save_json(self.path, captains)

        logger.info(f'Saved {len(current)} captain(s) for GW{gw}')
        return current
