"""Basic usage example for replaygen.

This example demonstrates:
1. Writing a generator whose progress can be saved
2. Saving its state after a few values
3. Resuming it from the saved JSON
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from replaygen import GenState, generator_with_state, yield_if_needed


@generator_with_state
def countdown(input, state):
    """Count down from input, yielding each number."""
    for n in range(input, 0, -1):
        yield from yield_if_needed(state, n)
    yield from yield_if_needed(state, "liftoff")


def main():
    """Main example function."""
    print("📋 Example 1: Running part of a generator")
    print("-" * 50)

    gen = countdown(input=5)
    for _ in range(3):
        print(f"   got {next(gen)}")

    saved = gen.state.to_json()
    print(f"💾 Saved state: {saved}")

    print("\n📋 Example 2: Resuming from the saved state")
    print("-" * 50)

    resumed = countdown(state=GenState.from_json(saved))
    for value in resumed:
        print(f"   got {value}")

    print(f"✅ Finished, final state: {resumed.state.to_json()}")


if __name__ == "__main__":
    main()
