"""
Schemas - Write Inputs

Validated inputs for the mutation endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional

ChannelVisibility = Literal["public", "private", "closed"]
MoveMovement = Literal[
    "insert_at", "move_to_top", "move_to_bottom", "move_up", "move_down",
]


class CreateChannelInput(BaseModel):
    title: str = Field(min_length=1)
    visibility: Optional[ChannelVisibility] = None
    description: Optional[str] = None
    group_id: Optional[int] = Field(default=None, gt=0)


class CreateBlockInput(BaseModel):
    value: str = Field(min_length=1)
    channel_ids: List[int]
    title: Optional[str] = None
    description: Optional[str] = None
    original_source_url: Optional[str] = None
    original_source_title: Optional[str] = None
    alt_text: Optional[str] = None
    insert_at: Optional[int] = Field(default=None, ge=0)


class ConnectBlockInput(BaseModel):
    block_id: int = Field(gt=0)
    channel_ids: List[int]
    position: Optional[int] = Field(default=None, ge=0)


class MoveConnectionInput(BaseModel):
    connection_id: int = Field(gt=0)
    movement: MoveMovement
    position: Optional[int] = Field(default=None, ge=0)
