from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class SchemaOut(BaseModel):
    fields: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    is_set: bool = False


class CustomSchemaIn(BaseModel):
    # Delimited header text, e.g. "DeviceId,PM1(UGM3),TEMP(C)"
    header: str = Field(..., min_length=1)


class SensorOut(BaseModel):
    key: str
    label: str
    unit: str
    field: str


class SeriesPointOut(BaseModel):
    timestamp: int
    value: Optional[float] = None


class SeriesOut(BaseModel):
    key: str
    label: str
    unit: str
    points: List[SeriesPointOut] = Field(default_factory=list)


class SnapshotOut(BaseModel):
    values: Dict[str, Union[float, str, None]] = Field(default_factory=dict)


class RawLogOut(BaseModel):
    lines: List[str] = Field(default_factory=list)
    max_lines: int


class IngestLinesIn(BaseModel):
    lines: List[str] = Field(default_factory=list)

    @field_validator("lines")
    @classmethod
    def validate_lines(cls, v):
        if len(v) > 10000:
            raise ValueError("Too many lines in one request (max 10000)")
        return v


class IngestResultOut(BaseModel):
    received: int
    outcomes: Dict[str, int] = Field(default_factory=dict)


class QuickCommandOut(BaseModel):
    label: str
    command: str
    confirm: Optional[str] = None


class CommandsOut(BaseModel):
    connected: bool
    newline: Optional[str] = None
    quick_commands: List[QuickCommandOut] = Field(default_factory=list)


class CommandIn(BaseModel):
    command: str = Field(..., min_length=1, max_length=256)
    newline: Optional[str] = None


class CommandResultOut(BaseModel):
    sent: bool
    payload: str
