"""Task and recurrence pattern data models."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Frequency(StrEnum):
    """How often a recurrence pattern repeats."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class Weekday(StrEnum):
    """Day of the week, ordered Monday first like ``date.weekday()``."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def ordinal(self) -> int:
        """0 for Monday through 6 for Sunday."""
        return list(Weekday).index(self)

    @property
    def short(self) -> str:
        return self.value[:3].title()

    @classmethod
    def from_date(cls, day: date) -> Weekday:
        return list(cls)[day.weekday()]

    @classmethod
    def parse(cls, value: Any) -> Weekday:
        """Parse a weekday from a member, full name, 3-letter abbreviation or index.

        Raises:
            ValueError: If the value does not name a weekday
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= 6:
                return list(cls)[value]
            raise ValueError(f"Weekday index out of range: {value}")
        if isinstance(value, str):
            text = value.strip().upper()
            for member in cls:
                if text == member.value or (len(text) >= 2 and member.value.startswith(text)):
                    return member
        raise ValueError(f"Unknown weekday: {value!r}")


class Priority(StrEnum):
    """Task priority level."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Task(BaseModel):
    """Task model representing a stored task.

    Attributes:
        id: Unique identifier for the task
        description: Task description
        priority: Priority level
        category: Optional category name
        user_id: Owner of the task
        is_completed: Completion status
        due_date: Optional due date
        created_at: Creation timestamp
        updated_at: Last update timestamp
        completed_at: Completion timestamp
    """

    id: str
    description: str
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    user_id: str | None = None
    is_completed: bool = False
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        description: Task description (required, non-blank)
        priority: Priority level
        category: Optional category name
        user_id: Owner of the task
        due_date: Optional due date
        is_completed: Initial completion status
    """

    description: str
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    user_id: str | None = None
    due_date: datetime | None = None
    is_completed: bool = False

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("description cannot be empty")
        return v


class TaskSnapshot(BaseModel):
    """Template attributes copied into every generated task instance."""

    model_config = ConfigDict(frozen=True)

    description: str
    priority: Priority = Priority.MEDIUM
    category: str | None = None
    user_id: str | None = None

    def to_instance(self, due_date: date) -> TaskCreate:
        """Build an incomplete task due at the start of ``due_date``."""
        return TaskCreate(
            description=self.description,
            priority=self.priority,
            category=self.category,
            user_id=self.user_id,
            due_date=datetime.combine(due_date, datetime.min.time()),
            is_completed=False,
        )


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        status: Filter by status ("active", "completed", "all")
        user_id: Filter by owner
        due_before: Tasks due on or before this date
        limit: Maximum number of results
    """

    status: str | None = Field(default=None, pattern="^(active|completed|all)$")
    user_id: str | None = None
    due_before: datetime | None = None
    limit: int | None = Field(default=None, ge=1)


class RecurrencePattern(BaseModel):
    """A recurrence rule bound to one template task, plus its generation state.

    Instances are immutable. Rule edits go through :meth:`with_changes`, which
    re-runs validation; generation progress goes through :meth:`advanced`.

    Attributes:
        id: Identifier assigned by the pattern store on first save
        task_id: Template task whose attributes are copied into each instance
        user_id: Owner of the template task
        frequency: DAILY, WEEKLY or MONTHLY
        interval_value: Repeat every N days / weeks / months
        start_date: First day of the series
        end_date: No instance is generated after this date
        days_of_week: Weekdays for WEEKLY rules
        day_of_month: Target day (1-31) for MONTHLY rules
        max_occurrences: Cap on the number of generated instances
        generated_count: Number of instances generated so far
        last_generated_date: Occurrence date of the latest generated instance
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    task_id: str
    user_id: str | None = None
    frequency: Frequency
    interval_value: int = Field(default=1, ge=1)
    start_date: date
    end_date: date | None = None
    days_of_week: frozenset[Weekday] = Field(default_factory=frozenset)
    day_of_month: int | None = Field(default=None, ge=1, le=31)
    max_occurrences: int | None = Field(default=None, ge=1)
    generated_count: int = Field(default=0, ge=0)
    last_generated_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("days_of_week", mode="before")
    @classmethod
    def parse_days_of_week(cls, v: Any) -> Any:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        return frozenset(Weekday.parse(day) for day in v)

    @model_validator(mode="before")
    @classmethod
    def drop_unused_parameters(cls, data: Any) -> Any:
        """Keep only the rule parameters the frequency uses."""
        if not isinstance(data, dict) or data.get("frequency") is None:
            return data
        try:
            frequency = Frequency(str(data["frequency"]).upper())
        except ValueError:
            return data
        data = dict(data)
        if frequency is not Frequency.WEEKLY:
            data["days_of_week"] = frozenset()
        if frequency is not Frequency.MONTHLY:
            data["day_of_month"] = None
        return data

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_rule(self) -> RecurrencePattern:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        if self.frequency is Frequency.WEEKLY and not self.days_of_week:
            raise ValueError("days_of_week is required for WEEKLY recurrence")
        if self.frequency is Frequency.MONTHLY and self.day_of_month is None:
            raise ValueError("day_of_month is required for MONTHLY recurrence")
        return self

    @property
    def status(self) -> Literal["active", "completed"]:
        return "completed" if self.is_completed() else "active"

    def is_completed(self) -> bool:
        """Whether the series has reached its occurrence cap or its end date.

        A pattern with neither ``max_occurrences`` nor ``end_date`` never completes.
        """
        if (
            self.max_occurrences is not None
            and self.generated_count >= self.max_occurrences
        ):
            return True
        return (
            self.end_date is not None
            and self.last_generated_date is not None
            and self.last_generated_date >= self.end_date
        )

    def base_date(self) -> date:
        """Date the next occurrence is computed from.

        Before the first generation this is the day before ``start_date``, since
        every calendar calculation starts one unit after its base.
        """
        if self.last_generated_date is not None:
            return self.last_generated_date
        return self.start_date - timedelta(days=1)

    def sorted_days(self) -> list[Weekday]:
        return sorted(self.days_of_week, key=lambda day: day.ordinal)

    def advanced(self, occurrence: date) -> RecurrencePattern:
        """Return a copy recording one more generated instance on ``occurrence``."""
        return self.model_copy(
            update={
                "generated_count": self.generated_count + 1,
                "last_generated_date": occurrence,
            }
        )

    def with_changes(self, **changes: Any) -> RecurrencePattern:
        """Return a re-validated copy with rule parameters replaced.

        Raises:
            pydantic.ValidationError: If the edited rule breaks an invariant
        """
        data = self.model_dump()
        data.update(changes)
        return RecurrencePattern.model_validate(data)


class RecurrencePatternFilters(BaseModel):
    """Filters for listing recurrence patterns.

    Attributes:
        active_only: Exclude completed patterns
        user_id: Filter by owner
        task_id: Filter by template task
    """

    active_only: bool = False
    user_id: str | None = None
    task_id: str | None = None
