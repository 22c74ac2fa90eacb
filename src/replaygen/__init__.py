"""replaygen - persistable generators through replay.

A generator built with replaygen carries a small state record. Saving that
record is enough to resume the generator later:
- The body re-runs from the start
- Suspension points already passed are fast-forwarded silently
- Yielding resumes once progress passes the saved point
"""

# Load environment variables from .env file if it exists
from dotenv import load_dotenv
load_dotenv()

from .core import (
    AssertionFailed,
    AsyncGeneratorFactory,
    AsyncGeneratorWithState,
    FreshStart,
    GeneratorFactory,
    GeneratorWithState,
    GenState,
    InvalidArgument,
    ReplayConfig,
    ReplayError,
    ReplayingIterableFactory,
    ReplayingIterator,
    Resume,
    async_generator_with_state,
    configure,
    generator_with_state,
    get_config,
    replaying,
    should_yield,
    yield_if_needed,
)
from .resumption import ResumptionManager, RunResult
from .storage import (
    InMemoryStateStore,
    SQLiteStateStore,
    StateStore,
    create_state_store,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "GenState",
    "FreshStart",
    "Resume",
    "generator_with_state",
    "yield_if_needed",
    "should_yield",
    "GeneratorFactory",
    "GeneratorWithState",
    "async_generator_with_state",
    "AsyncGeneratorFactory",
    "AsyncGeneratorWithState",
    "replaying",
    "ReplayingIterableFactory",
    "ReplayingIterator",
    # Configuration
    "ReplayConfig",
    "configure",
    "get_config",
    # Errors
    "ReplayError",
    "InvalidArgument",
    "AssertionFailed",
    # Storage
    "StateStore",
    "InMemoryStateStore",
    "SQLiteStateStore",
    "create_state_store",
    # Resumption
    "ResumptionManager",
    "RunResult",
]
