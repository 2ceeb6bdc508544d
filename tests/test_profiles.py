"""Tests for page profile resolution."""

from __future__ import annotations

import unittest
from dataclasses import replace

from proposals.config import PAGE_HEIGHT, PAGE_MARGIN, PAGE_WIDTH
from proposals.profiles import (
    DEFAULT_PAGE_PROFILE,
    PAGE_PROFILES,
    resolve_page_profile,
    validate_page_profile,
)


class PageProfileTests(unittest.TestCase):
    def test_default_profile_is_letter(self) -> None:
        profile = resolve_page_profile()
        self.assertEqual(DEFAULT_PAGE_PROFILE, "letter")
        self.assertEqual((profile.page_width, profile.page_height), (PAGE_WIDTH, PAGE_HEIGHT))
        self.assertEqual(profile.content_width, PAGE_WIDTH - 2 * PAGE_MARGIN)
        self.assertEqual(profile.content_height, PAGE_HEIGHT - 2 * PAGE_MARGIN)
        self.assertEqual((profile.content_width_px, profile.density, profile.block_gap_px), (720, 2, 12))

    def test_builtin_profiles_are_valid(self) -> None:
        for profile in PAGE_PROFILES.values():
            validate_page_profile(profile)

    def test_resolve_profile_rejects_unknown_names(self) -> None:
        with self.assertRaisesRegex(ValueError, "Valid profiles: a4, letter"):
            resolve_page_profile("tabloid")

    def test_validation_rejects_unusable_geometry(self) -> None:
        letter = resolve_page_profile("letter")
        with self.assertRaises(ValueError):
            validate_page_profile(replace(letter, margin=400))
        with self.assertRaises(ValueError):
            validate_page_profile(replace(letter, margin=-1))
        with self.assertRaises(ValueError):
            validate_page_profile(replace(letter, content_width_px=0))
        with self.assertRaises(ValueError):
            validate_page_profile(replace(letter, density=0))
        with self.assertRaises(TypeError):
            validate_page_profile(replace(letter, density=1.5))
        with self.assertRaises(ValueError):
            validate_page_profile(replace(letter, block_gap_px=-2))


if __name__ == "__main__":
    unittest.main()
