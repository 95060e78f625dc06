"""Task (item) domain models and enums."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class ItemType(StrEnum):
    """Kind of household item stored in the task database."""

    CHORE = "chore"
    INVENTORY = "inventory"
    DOCUMENT = "document"


class ChoreStatus(StrEnum):
    """Chore lifecycle state (todo -> doing -> done)."""

    TODO = "todo"
    DOING = "doing"
    DONE = "done"


class InventoryStatus(StrEnum):
    """Inventory item state."""

    HAVE = "have"
    OUTGROWN = "outgrown"
    BROKEN = "broken"
    TO_BUY = "to-buy"
    BOUGHT = "bought"


class DocumentStatus(StrEnum):
    """Document validity state."""

    VALID = "valid"
    EXPIRING_SOON = "expiring-soon"
    EXPIRED = "expired"
    RENEWED = "renewed"


class Frequency(StrEnum):
    """Repeat interval of a recurring chore."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Task(BaseModel):
    """Task data transfer object, as returned by the task store."""

    id: str = Field(..., description="Unique item ID from database")
    title: str = Field(..., description="Item title (e.g., 'Tidy toys')")
    type: ItemType = Field(default=ItemType.CHORE, description="chore, inventory or document")
    status: str = Field(default=ChoreStatus.TODO, description="Lifecycle status; chores use ChoreStatus values")
    owner: str = Field(default="Family", description="Family member owning the item")
    due_date: date | None = Field(default=None, description="Calendar date the chore is due")
    created_at: datetime = Field(..., description="Creation timestamp (local time)")
    updated_at: datetime = Field(..., description="Last update timestamp (local time)")

    # Chore-specific
    points: int | None = Field(default=None, description="Reward points for completion")
    recurring: bool = Field(default=False, description="Whether the chore repeats")
    frequency: Frequency | None = Field(default=None, description="Repeat interval when recurring")

    # Inventory-specific
    category: str | None = Field(default=None, description="Inventory or document category")
    size: str | None = Field(default=None, description="Clothing or shoe size")
    price: float | None = Field(default=None, description="Price in euro")
    store: str | None = Field(default=None, description="Where to buy")

    # Document-specific
    expiry_date: date | None = Field(default=None, description="Document expiry date")

    notes: str | None = Field(default=None, description="Free-text notes")

    @property
    def is_open(self) -> bool:
        return self.status != ChoreStatus.DONE
