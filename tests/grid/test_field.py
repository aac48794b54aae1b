"""Tests for padded fields and the buffer pool."""

import numpy as np
import pytest

from stablefluids.grid import BufferPool, Field


class TestBufferPool:
    """Tests for buffer allocation."""

    @pytest.mark.parametrize("n", [0, -3])
    def test_rejects_empty_grid(self, n):
        with pytest.raises(ValueError):
            BufferPool(n)

    def test_buffers_are_zeroed_and_padded(self):
        pool = BufferPool(5)
        f = pool.field("x")
        assert f.data.shape == (7, 7)
        assert f.data.dtype == np.float64
        assert not f.data.any()

    def test_double_buffered_field_uses_two_buffers(self):
        pool = BufferPool(3)
        pool.field("a")
        pool.field("b", double_buffered=True)
        assert len(pool) == 3


class TestFieldAccess:
    """Tests for cell access and the flat index mapping."""

    def test_flat_index_is_memory_offset(self):
        f = BufferPool(4).field("x")
        f.set(2, 3, 7.5)
        k = f.flat_index(2, 3)
        assert k == 2 + 3 * 6
        assert f.data.ravel(order="K")[k] == 7.5

    def test_get_set_add(self):
        f = BufferPool(4).field("x")
        f.set(1, 1, 2.0)
        f.add(1, 1, 3.0)
        assert f.get(1, 1) == 5.0

    def test_ghost_cells_are_addressable(self):
        f = BufferPool(4).field("x")
        f.set(0, 5, 1.0)
        assert f.get(0, 5) == 1.0

    @pytest.mark.parametrize("i, j", [(-1, 1), (1, -1), (6, 1), (1, 6)])
    def test_out_of_range_raises(self, i, j):
        f = BufferPool(4).field("x")
        with pytest.raises(IndexError):
            f.get(i, j)
        with pytest.raises(IndexError):
            f.set(i, j, 1.0)

    def test_interior_view(self):
        f = BufferPool(3).field("x")
        f.interior[:] = 1.0
        assert f.data.sum() == 9.0
        assert f.get(0, 0) == 0.0


class TestSwap:
    """Tests for handle swapping."""

    def test_swap_reassigns_handles_without_copy(self):
        f = BufferPool(3).field("x", double_buffered=True)
        front, back = f.data, f.next
        f.set(1, 1, 4.0)
        f.swap()
        assert f.data is back
        assert f.next is front
        assert f.next[1, 1] == 4.0
        assert f.swaps == 1

    def test_single_buffered_field_has_no_shadow(self):
        f = BufferPool(3).field("x")
        with pytest.raises(RuntimeError):
            f.next
        with pytest.raises(RuntimeError):
            f.swap()

    def test_shares_buffer(self):
        pool = BufferPool(3)
        f = pool.field("x")
        alias = Field("alias", pool, f.front)
        other = pool.field("y")
        assert f.shares_buffer(alias)
        assert not f.shares_buffer(other)
