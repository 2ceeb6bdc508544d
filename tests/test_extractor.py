"""Tests for block discovery over laid-out view trees."""

from __future__ import annotations

import unittest

from proposals.config import Theme
from proposals.pagination import Block, NoContentError, extract_blocks
from proposals.view import FontBook, Style, div, layout_view, spacer

_FONTS = FontBook.from_theme(Theme)


def _laid_out(root):
    layout_view(root, width=400, fonts=_FONTS)
    return root


class ExtractBlocksTests(unittest.TestCase):
    def test_marked_blocks_are_returned_in_order_with_offsets(self) -> None:
        root = _laid_out(
            div(
                div(spacer(100), block=True),
                div(spacer(50), block=True),
                style=Style(gap=10, padding_y=20),
            )
        )

        blocks = extract_blocks(root)
        self.assertEqual(
            blocks,
            [
                Block(vertical_start=20, vertical_end=120, force_break_before=False, path=(0,)),
                Block(vertical_start=130, vertical_end=180, force_break_before=False, path=(1,)),
            ],
        )
        self.assertEqual(blocks[1].height, 50)

    def test_nested_markers_belong_to_outer_block(self) -> None:
        root = _laid_out(
            div(
                div(div(spacer(30), block=True), div(spacer(30), block=True), block=True),
                div(spacer(10), block=True),
            )
        )

        blocks = extract_blocks(root)
        self.assertEqual([block.path for block in blocks], [(0,), (1,)])
        self.assertEqual(blocks[0].height, 60)

    def test_blocks_inside_unmarked_containers_are_found(self) -> None:
        root = _laid_out(
            div(
                div(div(spacer(20), block=True), div(spacer(20), block=True)),
                div(spacer(20), block=True),
            )
        )

        self.assertEqual([block.path for block in extract_blocks(root)], [(0, 0), (0, 1), (1,)])

    def test_break_marker_on_block_forces_break(self) -> None:
        root = _laid_out(
            div(
                div(spacer(20), block=True),
                div(spacer(20), block=True, break_before=True),
            )
        )

        self.assertEqual([block.force_break_before for block in extract_blocks(root)], [False, True])

    def test_break_marker_on_container_applies_to_its_first_block(self) -> None:
        section = div(
            div(spacer(20), block=True),
            div(spacer(20), block=True),
            break_before=True,
        )
        root = _laid_out(div(div(spacer(20), block=True), section))

        self.assertEqual([block.force_break_before for block in extract_blocks(root)], [False, True, False])

    def test_falls_back_to_direct_children_without_markers(self) -> None:
        root = _laid_out(div(spacer(40), spacer(60), style=Style(gap=5)))

        blocks = extract_blocks(root)
        self.assertEqual([block.path for block in blocks], [(0,), (1,)])
        self.assertEqual([block.vertical_start for block in blocks], [0, 45])

    def test_zero_height_blocks_are_skipped_and_carry_their_break(self) -> None:
        root = _laid_out(
            div(
                div(spacer(20), block=True),
                div(block=True, break_before=True),
                div(spacer(20), block=True),
            )
        )

        blocks = extract_blocks(root)
        self.assertEqual([block.path for block in blocks], [(0,), (2,)])
        self.assertTrue(blocks[1].force_break_before)

    def test_empty_view_raises_no_content(self) -> None:
        with self.assertRaises(NoContentError) as context:
            extract_blocks(_laid_out(div()))
        self.assertEqual(context.exception.stage, "extract")

    def test_only_empty_blocks_raise_no_content(self) -> None:
        with self.assertRaises(NoContentError):
            extract_blocks(_laid_out(div(div(block=True), div(block=True))))

    def test_requires_layout(self) -> None:
        with self.assertRaises(ValueError):
            extract_blocks(div(div(spacer(10), block=True)))

    def test_row_siblings_share_a_start_and_keep_document_order(self) -> None:
        root = _laid_out(
            div(
                div(spacer(30), block=True),
                div(spacer(50), block=True),
                style=Style(direction="row"),
            )
        )

        blocks = extract_blocks(root)
        self.assertEqual([block.path for block in blocks], [(0,), (1,)])
        self.assertEqual([block.vertical_start for block in blocks], [0, 0])


if __name__ == "__main__":
    unittest.main()
