"""
Follow-channel message schemas for the session player WebSocket.

Inbound messages report the player's current time or a manual scroll of
the transcript panel; outbound messages announce the segment to
highlight.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class TimeMessage(BaseModel):
    type: Literal["time"]
    t: float = Field(..., ge=0.0, allow_inf_nan=False)


class ScrollMessage(BaseModel):
    type: Literal["scroll"]


FollowMessage = Annotated[Union[TimeMessage, ScrollMessage], Field(discriminator="type")]
follow_message_adapter: TypeAdapter[FollowMessage] = TypeAdapter(FollowMessage)


class ReadyEvent(BaseModel):
    type: Literal["ready"] = "ready"
    segments: int


class ActiveEvent(BaseModel):
    type: Literal["active"] = "active"
    seq: int
    start_seconds: float
    scroll: bool


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    detail: str
