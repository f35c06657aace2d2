"""Push payload schema shared by the push sender and the service worker.

Field names on the wire are camelCase (``requireInteraction``, ``leadId``);
Python code uses the snake_case attributes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationActionSchema(BaseModel):
    action: str
    title: str
    icon: str | None = None


class PushPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int | None = None
    title: str | None = None
    body: str | None = None
    icon: str | None = None
    tag: str | None = None
    data: dict[str, Any] | None = None
    require_interaction: bool | None = Field(default=None, alias="requireInteraction")
    actions: list[NotificationActionSchema] | None = None
    vibrate: list[int] | None = None
    image: str | None = None
    timestamp: int | None = None
    type: str | None = None
    link: str | None = None
    lead_id: str | int | None = Field(default=None, alias="leadId")
    appointment_id: str | int | None = Field(default=None, alias="appointmentId")
    vehicle_id: str | int | None = Field(default=None, alias="vehicleId")
    communication_id: str | int | None = Field(default=None, alias="communicationId")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, leaving out unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
