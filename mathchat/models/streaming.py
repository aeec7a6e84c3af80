"""
Streaming and rendering event schemas.

Relay lifecycle states and the diagram frame height message.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class RelayState(str, Enum):
    """Lifecycle of one Stream Relay invocation."""

    IDLE = "idle"
    FORWARDING = "forwarding"
    FINALIZING = "finalizing"
    CLOSED = "closed"
    ERRORED = "errored"


class DiagramHeightMessage(BaseModel):
    """Height report posted by a rendered diagram document to its parent."""

    model_config = ConfigDict(strict=True)

    type: Literal["tikzjax:height"]
    height: float
