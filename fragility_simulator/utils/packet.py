"""
Fragility packet, the field-named record handed to a downstream
publisher. Transport is not handled here.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict

from fragility_simulator.engine.entity_state import EntityState
from fragility_simulator.errors import InvalidInputError


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class FragilityPacket:
    """A single (state, score) observation from one node."""
    source: str
    state: EntityState
    fragility: float
    timestamp: int = field(default_factory=_now_ms)   # Unix epoch ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "source": self.source,
            "state": self.state.to_dict(),
            "fragility": self.fragility,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, payload: str) -> "FragilityPacket":
        try:
            data = json.loads(payload)
            return cls(
                source=str(data["source"]),
                state=EntityState(**data["state"]),
                fragility=float(data["fragility"]),
                timestamp=int(data["timestamp"]),
            )
        except InvalidInputError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidInputError(f"malformed fragility packet: {exc}") from exc
