"""Application state that used to live in ambient key-value flags."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_CARBON_GOAL = 5000.0


class AppSession(BaseModel):
    """Per-user UI state persisted next to the pins."""

    has_shown_analysis_notification: bool = False
    has_seen_welcome_popup: bool = False
    user_carbon_goal: float = Field(default=DEFAULT_CARBON_GOAL)

    @field_validator("user_carbon_goal", mode="before")
    @classmethod
    def parse_carbon_goal(cls, v):
        """Fall back to the default goal for missing or non-positive values."""
        try:
            goal = float(v)
        except (TypeError, ValueError):
            return DEFAULT_CARBON_GOAL
        if goal <= 0:
            return DEFAULT_CARBON_GOAL
        return goal

    def sync_with_pins(self, pin_count: int) -> None:
        """Reset the analysis hint once the last pin is gone."""
        if pin_count == 0:
            self.has_shown_analysis_notification = False

    def should_show_analysis_notification(self, pin_count: int) -> bool:
        """Return True the first time there is something to analyse."""
        return pin_count > 0 and not self.has_shown_analysis_notification
