"""Pydantic models for creating and updating records in the task database."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from hausgeist.domain.task import ChoreStatus, Frequency, ItemType


class TaskCreate(BaseModel):
    """Pydantic model for creating a chore record."""

    title: str = Field(..., description="Task title")
    owner: str = Field(..., description="Owner name (e.g. 'Ira' or 'Family')")
    type: ItemType = Field(default=ItemType.CHORE, description="Item kind")
    status: str = Field(default=ChoreStatus.TODO, description="Initial status")
    due_date: date | None = Field(default=None, description="Optional due date")
    points: int | None = Field(default=None, description="Optional reward points")
    recurring: bool | None = Field(default=None, description="Whether the chore repeats")
    frequency: Frequency | None = Field(default=None, description="Repeat interval")
    category: str | None = Field(default=None, description="Inventory/document category")
    size: str | None = Field(default=None, description="Inventory size")
    expiry_date: date | None = Field(default=None, description="Document expiry date")
    notes: str | None = Field(default=None, description="Free-text notes")

    @field_validator("title")
    @classmethod
    def validate_title_not_blank(cls, v: str) -> str:
        """Validate the title carries some text."""
        stripped = v.strip()
        if not stripped:
            msg = "Task title must not be empty"
            raise ValueError(msg)
        return stripped


class TaskStatusUpdate(BaseModel):
    """Pydantic model for moving a chore along its lifecycle."""

    status: ChoreStatus = Field(..., description="New chore status")
    points: int | None = Field(default=None, description="Points to persist alongside the status change")
