import unittest

from textclass_chat.api.categories import (
    CATEGORIES,
    find_category,
    model_name,
    resolve_label,
    to_api_label,
    to_display_label,
)


class CategoryTableTests(unittest.TestCase):
    def test_table_has_ten_distinct_labels_on_both_sides(self) -> None:
        self.assertEqual(10, len(CATEGORIES))
        self.assertEqual(10, len({c.api_label for c in CATEGORIES}))
        self.assertEqual(10, len({c.display_label for c in CATEGORIES}))

    def test_every_api_label_round_trips_through_display_label(self) -> None:
        for category in CATEGORIES:
            with self.subTest(label=category.api_label):
                display = to_display_label(category.api_label)
                self.assertEqual(category.display_label, display)
                self.assertEqual(category.api_label, to_api_label(display))

    def test_restores_diacritics(self) -> None:
        self.assertEqual("Sức khỏe", to_display_label("Suc khoe"))
        self.assertEqual("Thể thao", to_display_label("The thao"))
        self.assertEqual("Kinh doanh", to_display_label("Kinh doanh"))

    def test_resolve_known_label(self) -> None:
        self.assertEqual(("Pháp luật", "Law"), resolve_label("Phap luat"))
        self.assertEqual(("Kinh doanh", "Business"), resolve_label("Kinh doanh"))

    def test_unknown_label_passes_through(self) -> None:
        self.assertIsNone(find_category("Du lich"))
        self.assertIsNone(to_display_label("Du lich"))
        self.assertEqual(("Du lich", "Du lich"), resolve_label("Du lich"))

    def test_model_names(self) -> None:
        self.assertEqual("ViT5", model_name(1))
        self.assertEqual("PhoBERT", model_name(2))


if __name__ == "__main__":
    unittest.main()
