"""Tests for state stores and the resumption manager."""

import asyncio
from dataclasses import fields

import pytest

from replaygen import (
    GenState,
    InMemoryStateStore,
    ResumptionManager,
    RunResult,
    SQLiteStateStore,
    async_generator_with_state,
    create_state_store,
    generator_with_state,
    replaying,
    should_yield,
    yield_if_needed,
)


@generator_with_state
def letters(input, state):
    for letter in input:
        yield from yield_if_needed(state, letter)


@async_generator_with_state
async def async_letters(input, state):
    for letter in input:
        await asyncio.sleep(0)
        if should_yield(state):
            yield letter


@pytest.fixture(params=["memory", "sqlite"])
async def store(request):
    """Create each kind of state store."""
    if request.param == "memory":
        store = InMemoryStateStore()
    else:
        store = SQLiteStateStore(":memory:")  # In-memory database for tests
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
async def manager(store):
    """Create a resumption manager with the letter generators registered."""
    manager = ResumptionManager(store)
    manager.register("letters", letters)
    manager.register("async_letters", async_letters)
    manager.register("range", replaying(lambda n: range(n)))
    return manager


@pytest.mark.asyncio
async def test_store_operations(store):
    """Save, load, list and delete states."""
    state = GenState(input=[1, 2], num_of_yields_executed=1, num_of_yields_to_skip=0)

    await store.save_state("job-1", state)
    loaded = await store.load_state("job-1")
    assert loaded == state
    assert loaded is not state

    state.num_of_yields_executed = 2
    await store.save_state("job-1", state)
    assert (await store.load_state("job-1")).num_of_yields_executed == 2

    await store.save_state("job-0", state)
    assert await store.list_keys() == ["job-0", "job-1"]

    assert await store.delete_state("job-1") is True
    assert await store.delete_state("job-1") is False
    assert await store.load_state("job-1") is None


@pytest.mark.asyncio
async def test_memory_store_resave_is_byte_identical():
    """Saving an unchanged state twice stores the same bytes."""
    store = InMemoryStateStore()
    gen = letters(input="abc")
    next(gen)

    await store.save_state("k", gen.state)
    first = store.get_raw("k")
    await store.save_state("k", gen.state)
    assert store.get_raw("k") == first


@pytest.mark.asyncio
async def test_sqlite_store_file(tmp_path):
    """States survive closing and reopening a file database."""
    db_path = tmp_path / "nested" / "states.db"

    async with SQLiteStateStore(str(db_path)) as store:
        await store.save_state("k", GenState(input="abc", num_of_yields_executed=2))

    async with SQLiteStateStore(str(db_path)) as store:
        gen = letters(state=await store.load_state("k"))
        assert list(gen) == ["c"]


def test_sqlite_store_requires_initialize():
    """Using the store before initialize() is an error."""
    store = SQLiteStateStore(":memory:")
    with pytest.raises(RuntimeError):
        asyncio.run(store.load_state("k"))


def test_create_state_store(monkeypatch, tmp_path):
    """The factory picks a store from arguments or the environment."""
    assert isinstance(create_state_store("memory"), InMemoryStateStore)

    monkeypatch.setenv("STATE_STORE_BACKEND", "sqlite")
    monkeypatch.setenv("STATE_STORE_PATH", str(tmp_path / "states.db"))
    store = create_state_store()
    assert isinstance(store, SQLiteStateStore)
    assert store.db_path == tmp_path / "states.db"

    with pytest.raises(ValueError):
        create_state_store("postgres")


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["letters", "async_letters", "range"])
async def test_manager_run_and_resume(manager, name):
    """Run partway, resume from the store, and get the full sequence."""
    input = "abcde" if name != "range" else 5
    expected = list(input) if name != "range" else list(range(5))

    handle = await manager.start(name, "job", input)
    first = await manager.run("job", handle, max_yields=2)
    assert first.values == expected[:2]
    assert not first.completed

    resumed = await manager.resume(name, "job")
    assert resumed.state.num_of_yields_to_skip == 2
    rest = await manager.run("job", resumed)

    assert first.values + rest.values == expected
    assert rest.completed
    assert (await manager.store.load_state("job")).num_of_yields_executed == 5


@pytest.mark.asyncio
async def test_manager_checkpoints_after_each_value(manager):
    """The stored state follows the generator one value at a time."""
    handle = await manager.start("letters", "job", "xyz")
    assert (await manager.store.load_state("job")).num_of_yields_executed == 0

    await manager.run("job", handle, max_yields=1)
    assert (await manager.store.load_state("job")).num_of_yields_executed == 1


@pytest.mark.asyncio
async def test_manager_delete_on_completion(manager):
    """Finished generators can be removed from the store."""
    handle = await manager.start("letters", "job", "ab")
    result = await manager.run("job", handle, delete_on_completion=True)

    assert result.completed
    assert result.values == ["a", "b"]
    assert await manager.list_saved() == []


@pytest.mark.asyncio
async def test_manager_errors(manager):
    """Unknown factories and missing states are reported."""
    with pytest.raises(ValueError):
        await manager.start("unknown", "job", "ab")

    with pytest.raises(KeyError):
        await manager.resume("letters", "missing")


@pytest.mark.asyncio
async def test_manager_propagates_body_errors(manager):
    """A failing body keeps the last checkpoint and re-raises."""
    @generator_with_state
    def failing(input, state):
        yield from yield_if_needed(state, "ok")
        raise RuntimeError("boom")

    manager.register("failing", failing)
    handle = await manager.start("failing", "job", 1)

    with pytest.raises(RuntimeError):
        await manager.run("job", handle)
    assert (await manager.store.load_state("job")).num_of_yields_executed == 1


@pytest.mark.asyncio
async def test_run_result_field_order(manager):
    """RunResult is (values, completed, state)."""
    handle = await manager.start("letters", "job", "ab")
    result = await manager.run("job", handle)

    assert result == RunResult(["a", "b"], True, handle.state)
    assert [f.name for f in fields(RunResult)] == ["values", "completed", "state"]
    assert result.state is handle.state


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
