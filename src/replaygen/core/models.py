"""Data models for generator replay.

GenState is the only thing that has to be persisted to resume a generator.
Its wire form uses camelCase keys so that saved states stay readable by
other implementations of the same format.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidArgument


class GenState(BaseModel):
    """Replay progress of a resumable generator.

    Attributes:
        input: The argument the generator was first created with
        num_of_yields_executed: Suspension points passed in the current run
        num_of_yields_to_skip: Suspension points to pass silently before
            yielding again; set from the previous run on every construction
    """

    model_config = ConfigDict(populate_by_name=True)

    input: Any = None
    num_of_yields_executed: int = Field(default=0, ge=0, alias="numOfYieldsExecuted")
    num_of_yields_to_skip: Optional[int] = Field(default=None, ge=0, alias="numOfYieldsToSkip")

    @property
    def is_fast_forwarding(self) -> bool:
        """True while the current run is still inside already-replayed points."""
        return (
            self.num_of_yields_to_skip is not None
            and self.num_of_yields_executed < self.num_of_yields_to_skip
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize to JSON in the wire shape."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenState":
        """Load a state from its wire shape (or python field names)."""
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "GenState":
        """Load a state from JSON."""
        return cls.model_validate_json(data)


@dataclass(frozen=True)
class FreshStart:
    """Start a generator from scratch with the given input."""

    input: Any

    def __post_init__(self):
        if self.input is None:
            raise InvalidArgument("FreshStart requires a non-None input")


@dataclass(frozen=True)
class Resume:
    """Resume a generator from a previously saved state."""

    state: Union[GenState, Dict[str, Any]]

    def __post_init__(self):
        if self.state is None:
            raise InvalidArgument("Resume requires a saved state")


Origin = Union[FreshStart, Resume]
