"""Resumption with a state store.

This example shows:
1. Registering a generator with ResumptionManager
2. Checkpointing to SQLite after every value
3. Simulating a crash and resuming from the database
"""

import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from replaygen import (
    ResumptionManager,
    SQLiteStateStore,
    async_generator_with_state,
    should_yield,
)


@async_generator_with_state
async def process_batches(input, state):
    """Pretend to process each batch, yielding a report per batch."""
    for batch in input["batches"]:
        await asyncio.sleep(0.1)
        if should_yield(state):
            yield f"processed {batch}"


async def main():
    """Main demo function."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    async with SQLiteStateStore("data/demo_states.db") as store:
        manager = ResumptionManager(store)
        manager.register("batches", process_batches)

        print("\n🚀 Starting job and stopping after two batches")
        handle = await manager.start("batches", "nightly", {"batches": ["a", "b", "c", "d"]})
        result = await manager.run("nightly", handle, max_yields=2)
        for value in result.values:
            print(f"   {value}")
        await handle.aclose()
        print("💥 Simulated crash")

        print("\n🔄 Resuming from the database")
        resumed = await manager.resume("batches", "nightly")
        result = await manager.run("nightly", resumed, delete_on_completion=True)
        for value in result.values:
            print(f"   {value}")

        print(f"\n✅ Completed: {result.completed}, saved jobs left: {await manager.list_saved()}")


if __name__ == "__main__":
    asyncio.run(main())
