"""
API Schemas for the Modes domain.

Response bodies are deliberately flat: the bundled frontend reads
`key`/`name`, `message` and `error` directly.
"""

from pydantic import BaseModel, RootModel
from typing import List


class ModeResponse(BaseModel):
    key: str
    name: str


class ModeListResponse(RootModel[List[ModeResponse]]):
    pass


class SwitchResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
