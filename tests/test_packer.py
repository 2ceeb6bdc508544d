"""Tests for greedy block packing."""

from __future__ import annotations

import unittest

from proposals.pagination import PackItem, pack_blocks


def _items(*heights: float, forced: tuple[int, ...] = ()) -> list[PackItem]:
    return [PackItem(index=idx, height=height, force_break_before=idx in forced) for idx, height in enumerate(heights)]


def _indexes(pages) -> list[list[int]]:
    return [[item.index for item in page.items] for page in pages]


class PackBlocksTests(unittest.TestCase):
    def test_third_block_moves_to_next_page_when_gap_overflows(self) -> None:
        pages = pack_blocks(_items(100, 100, 100), page_content_height=250, gap=10)
        self.assertEqual(_indexes(pages), [[0, 1], [2]])
        self.assertEqual([p.offset for p in pages[0].placements], [0.0, 110.0])
        self.assertEqual(pages[0].used_height, 210.0)
        self.assertEqual(pages[1].placements[0].offset, 0.0)

    def test_oversized_block_gets_a_page_of_its_own(self) -> None:
        pages = pack_blocks(_items(300), page_content_height=250, gap=10)
        self.assertEqual(_indexes(pages), [[0]])
        self.assertEqual(pages[0].used_height, 300.0)

    def test_oversized_block_between_normal_blocks(self) -> None:
        pages = pack_blocks(_items(50, 400, 50), page_content_height=250, gap=10)
        self.assertEqual(_indexes(pages), [[0], [1], [2]])

    def test_forced_break_starts_new_page_despite_room(self) -> None:
        pages = pack_blocks(_items(50, 50, forced=(1,)), page_content_height=1000)
        self.assertEqual(_indexes(pages), [[0], [1]])
        self.assertFalse(pages[0].is_forced)
        self.assertTrue(pages[1].is_forced)

    def test_forced_break_on_first_block_does_not_emit_empty_page(self) -> None:
        pages = pack_blocks(_items(50, 50, forced=(0,)), page_content_height=1000)
        self.assertEqual(_indexes(pages), [[0, 1]])

    def test_exact_fit_stays_on_page(self) -> None:
        pages = pack_blocks(_items(120, 120), page_content_height=250, gap=10)
        self.assertEqual(_indexes(pages), [[0, 1]])
        self.assertEqual(pages[0].used_height, 250.0)

    def test_no_items_means_no_pages(self) -> None:
        self.assertEqual(pack_blocks([], page_content_height=100), [])

    def test_pages_preserve_order_and_respect_height(self) -> None:
        heights = (40, 90, 10, 75, 200, 5, 60, 60, 60, 130)
        pages = pack_blocks(_items(*heights, forced=(6,)), page_content_height=200, gap=8)

        flattened = [index for page in _indexes(pages) for index in page]
        self.assertEqual(flattened, list(range(len(heights))))
        for page in pages:
            self.assertTrue(page.placements)
            if len(page.placements) > 1:
                self.assertLessEqual(page.used_height, 200)
        starts = [page.items[0].index for page in pages]
        self.assertIn(6, starts)

    def test_packing_is_deterministic(self) -> None:
        items = _items(80, 30, 170, 20, 20, forced=(3,))
        first = pack_blocks(items, page_content_height=180, gap=4)
        second = pack_blocks(items, page_content_height=180, gap=4)
        self.assertEqual(first, second)

    def test_rejects_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            pack_blocks(_items(10), page_content_height=0)
        with self.assertRaises(ValueError):
            pack_blocks(_items(10), page_content_height=100, gap=-1)
        with self.assertRaises(ValueError):
            pack_blocks(_items(10, 0), page_content_height=100)


if __name__ == "__main__":
    unittest.main()
