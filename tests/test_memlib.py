import pytest

from labkit.memlib import MAX_HEAP, HeapExhausted, SimulatedMemory


@pytest.fixture
def memory():
    return SimulatedMemory(64)


def test_new_heap_is_empty(memory):
    assert memory.heapsize() == 0
    assert memory.heap_hi() == memory.heap_lo() - 1


def test_sbrk_returns_old_break(memory):
    first = memory.sbrk(16)
    second = memory.sbrk(8)
    assert first == memory.heap_lo()
    assert second == first + 16
    assert memory.heapsize() == 24
    assert memory.heap_hi() == memory.heap_lo() + 23


def test_sbrk_negative_raises(memory):
    with pytest.raises(HeapExhausted, match="Ran out of memory"):
        memory.sbrk(-1)


def test_sbrk_beyond_max_raises_and_keeps_break(memory):
    memory.sbrk(60)
    with pytest.raises(HeapExhausted):
        memory.sbrk(5)
    assert memory.heapsize() == 60


def test_sbrk_up_to_max_is_allowed(memory):
    memory.sbrk(64)
    assert memory.heapsize() == memory.max_heap


def test_heap_exhausted_is_memory_error(memory):
    with pytest.raises(MemoryError):
        memory.sbrk(65)


def test_reset_brk_empties_heap(memory):
    memory.sbrk(32)
    memory.reset_brk()
    assert memory.heapsize() == 0
    assert memory.sbrk(4) == memory.heap_lo()


def test_write_read_round_trip(memory):
    addr = memory.sbrk(16)
    memory.write(addr + 2, b"heap")
    assert memory.read(addr + 2, 4) == b"heap"


def test_fill_uses_low_byte(memory):
    addr = memory.sbrk(8)
    memory.fill(addr, 0x1AB, 8)
    assert memory.read(addr, 8) == bytes([0xAB]) * 8


def test_access_outside_heap_raises(memory):
    memory.sbrk(8)
    with pytest.raises(IndexError):
        memory.read(4, 8)
    with pytest.raises(IndexError):
        memory.write(-1, b"x")


def test_pagesize_is_power_of_two(memory):
    size = memory.pagesize()
    assert size > 0
    assert size & (size - 1) == 0


def test_default_max_heap():
    assert SimulatedMemory().max_heap == MAX_HEAP