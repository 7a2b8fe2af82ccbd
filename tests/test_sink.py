import asyncio

import pytest
from graph_explorer import NodeData
from graph_explorer.sink import NodeSink, gather_results, sort_by_distance


async def test_collect_in_arrival_order():
    sink = NodeSink(maxsize=0)
    await sink.send(NodeData(name="b", distance=1))
    await sink.send(NodeData(name="a", distance=0))
    await sink.close()

    assert sink.closed
    assert sink.sent == 2
    assert [r.name for r in await sink.collect()] == ["b", "a"]


async def test_close_once():
    sink = NodeSink(maxsize=0)
    await sink.close()

    with pytest.raises(RuntimeError, match="already signalled"):
        await sink.close()
    with pytest.raises(RuntimeError, match="completed sink"):
        await sink.send(NodeData(name="a", distance=0))


async def test_gather_results():
    sink = NodeSink(maxsize=1)

    async def produce():
        for name, distance in [("c", 1), ("a", 0), ("b", 1), ("d", 2), ("c", 1)]:
            await sink.send(NodeData(name=name, distance=distance))
        await sink.close()

    results, _ = await asyncio.gather(gather_results(sink), produce())
    assert [r.as_tuple() for r in results] == [
        ("a", 0),
        ("b", 1),
        ("c", 1),
        ("d", 2),
    ]


def test_sort_by_distance():
    records = [
        NodeData(name="z", distance=0),
        NodeData(name="b", distance=2),
        NodeData(name="a", distance=2),
        NodeData(name="y", distance=1),
    ]
    assert [r.as_tuple() for r in sort_by_distance(records)] == [
        ("z", 0),
        ("y", 1),
        ("a", 2),
        ("b", 2),
    ]
    assert sort_by_distance(records) == sorted(records)


async def test_default_sink_throttles_senders():
    sink = NodeSink()
    await sink.send(NodeData(name="a", distance=0))

    # A second record waits until a receiver takes the first.
    pending = asyncio.create_task(sink.send(NodeData(name="b", distance=1)))
    await asyncio.sleep(0)
    assert not pending.done()

    async def finish():
        await pending
        await sink.close()

    records, _ = await asyncio.gather(sink.collect(), finish())
    assert [r.name for r in records] == ["a", "b"]


def test_records_are_keyword_only():
    with pytest.raises(TypeError):
        NodeData("a", 0)  # type: ignore[misc]
    assert NodeData(name="a", distance=0).as_tuple() == ("a", 0)
