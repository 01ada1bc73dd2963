import json
import logging
import os
import tempfile
from pathlib import Path
from threading import Lock
from typing import Callable
from uuid import UUID

from pydantic import ValidationError

from abroad.models import AppSession, Pin

logger = logging.getLogger(__name__)


class PinStoreError(RuntimeError):
    """The pins file cannot be rewritten without losing data."""


class PinStore:
    """Service for saving and loading pins and app state as JSON."""

    def __init__(self, data_dir: Path | str = "data", pins_file: str = "pins.json"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.pins_path = self.data_dir / pins_file
        self.session_path = self.data_dir / "session.json"
        self._lock = Lock()

    def _read_records(self, strict: bool = False) -> list:
        """
        Load the raw JSON array from disk.

        Args:
            strict: Raise PinStoreError instead of reading an unreadable file as empty

        Returns:
            The stored records, or an empty list if there is no file yet
        """
        if not self.pins_path.exists():
            return []
        try:
            with open(self.pins_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            if strict:
                raise PinStoreError(f"Refusing to overwrite unreadable {self.pins_path}: {e}") from e
            logger.warning("Could not read %s: %s", self.pins_path, e)
            return []
        if not isinstance(data, list):
            message = f"Expected a list of pins in {self.pins_path}, got {type(data).__name__}"
            if strict:
                raise PinStoreError(f"Refusing to overwrite {self.pins_path}: {message}")
            logger.warning(message)
            return []
        return data

    def _load_for_write(self) -> list[tuple[object, Pin | None]]:
        # Invalid records stay paired with None so writes put them back untouched
        loaded = []
        for index, record in enumerate(self._read_records(strict=True)):
            try:
                loaded.append((record, Pin.from_storage(record)))
            except ValidationError:
                logger.debug("Keeping invalid pin record #%d as stored", index)
                loaded.append((record, None))
        return loaded

    def _write_json(self, path: Path, data) -> None:
        # Write next to the target and swap it in, so a crash never leaves half a file
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _write(self, loaded: list[tuple[object, Pin | None]]) -> None:
        records = [record if pin is None else pin.to_storage() for record, pin in loaded]
        self._write_json(self.pins_path, records)

    def get_all(self) -> list[Pin]:
        """
        Load every pin in stored order.

        Records that fail validation are skipped and logged.

        Returns:
            A fresh list of pins; changing it does not touch the store
        """
        pins = []
        for index, record in enumerate(self._read_records()):
            try:
                pins.append(Pin.from_storage(record))
            except ValidationError as e:
                logger.warning("Skipping invalid pin record #%d: %s", index, e)
        return pins

    def get(self, pin_id: UUID) -> Pin | None:
        for pin in self.get_all():
            if pin.id == pin_id:
                return pin
        return None

    def append(self, pin: Pin) -> None:
        with self._lock:
            loaded = self._load_for_write()
            loaded.append((None, pin))
            self._write(loaded)
        logger.debug("Added pin %s", pin.id)

    def remove(self, pin_id: UUID) -> bool:
        """
        Delete a pin.

        Args:
            pin_id: Id of the pin to delete

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            loaded = self._load_for_write()
            remaining = [(record, pin) for record, pin in loaded if pin is None or pin.id != pin_id]
            if len(remaining) == len(loaded):
                return False
            self._write(remaining)
        logger.debug("Removed pin %s", pin_id)
        return True

    def update(self, pin_id: UUID, mutator: Callable[[Pin], None]) -> Pin | None:
        """
        Apply ``mutator`` to a copy of the stored pin and save the result.

        Args:
            pin_id: Id of the pin to change
            mutator: Function that edits the pin in place

        Returns:
            The saved pin, or None if no pin has that id
        """
        with self._lock:
            loaded = self._load_for_write()
            for index, (record, pin) in enumerate(loaded):
                if pin is not None and pin.id == pin_id:
                    changed = pin.model_copy(deep=True)
                    mutator(changed)
                    # Round-trip through storage form so mutations get validated
                    saved = Pin.from_storage(changed.to_storage())
                    loaded[index] = (record, saved)
                    self._write(loaded)
                    return saved
        return None

    def replace_all(self, pins: list[Pin]) -> None:
        """Overwrite the whole collection, e.g. with an uploaded file."""
        with self._lock:
            self._write_json(self.pins_path, [pin.to_storage() for pin in pins])

    def save_session(self, session: AppSession) -> Path:
        """Save the app session flags next to the pins."""
        self._write_json(self.session_path, session.model_dump(mode="json"))
        return self.session_path

    def load_session(self) -> AppSession:
        """Load the app session, or a fresh one if none is saved."""
        if not self.session_path.exists():
            return AppSession()
        try:
            with open(self.session_path, encoding="utf-8") as f:
                data = json.load(f)
            return AppSession.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Could not load session from %s: %s", self.session_path, e)
            return AppSession()
