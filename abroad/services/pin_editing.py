"""Edit-session rules: save validation and abandoned-draft cleanup."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from abroad.models.pin import Pin
from abroad.services.pin_aggregates import is_abandoned_draft

if TYPE_CHECKING:
    from abroad.storage.json_store import PinStore

logger = logging.getLogger(__name__)


class PinValidationError(ValueError):
    """A pin cannot be saved in its current state."""


class EmptyTitleError(PinValidationError):
    def __init__(self):
        super().__init__("Pin title cannot be empty.")


class InvalidDateRangeError(PinValidationError):
    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(f"Start date {start.isoformat()} cannot be after end date {end.isoformat()}.")


def validate_pin(pin: Pin) -> None:
    """Raise the first validation error that blocks saving the pin."""
    if not pin.title.strip():
        raise EmptyTitleError()
    if pin.start_date and pin.end_date and pin.start_date > pin.end_date:
        raise InvalidDateRangeError(pin.start_date, pin.end_date)


class PinEditSession:
    """
    One open editor for one pin.

    ``today`` is the date the editor's date pickers start on; a date still
    equal to it when the editor closes counts as untouched.
    """

    def __init__(self, pin: Pin, today: date | None = None):
        self.pin = pin
        self.today = today or date.today()

    def validate(self) -> None:
        validate_pin(self.pin)

    def save(self, store: "PinStore") -> Pin:
        """Validate and persist the pin; validation errors leave the store untouched."""
        self.validate()
        saved = store.update(self.pin.id, lambda stored: self._copy_into(stored))
        if saved is None:
            store.append(self.pin)
            saved = self.pin
        return saved

    def close(self, store: "PinStore") -> bool:
        """Drop the pin from the store if it was never filled in."""
        if not is_abandoned_draft(self.pin, initial_start=self.today, initial_end=self.today):
            return False
        logger.info("Discarding abandoned draft pin %s", self.pin.id)
        store.remove(self.pin.id)
        return True

    def _copy_into(self, stored: Pin) -> None:
        for name in Pin.model_fields:
            if name != "id":
                setattr(stored, name, getattr(self.pin, name))


def close_stored_pin(store: "PinStore", pin_id: UUID, today: date | None = None) -> bool:
    """
    End the edit session of a pin the user moved away from.

    The stored copy is checked, since unsaved edits of a pin that is no longer
    on screen are gone anyway.

    Returns:
        True if the pin was an abandoned draft and has been removed
    """
    pin = store.get(pin_id)
    if pin is None:
        return False
    return PinEditSession(pin, today=today).close(store)
