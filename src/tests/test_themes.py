import unittest

from practice_tui.themes import (
    DARK_THEME,
    DEFAULT_THEMES,
    LIGHT_THEME,
    load_themes,
    toggled_theme,
)


class TestThemeLoading(unittest.TestCase):
    def test_builtin_themes(self):
        themes = load_themes()
        self.assertIn(LIGHT_THEME, themes)
        self.assertIn(DARK_THEME, themes)
        self.assertFalse(themes[LIGHT_THEME].dark)
        self.assertTrue(themes[DARK_THEME].dark)

    def test_custom_theme_is_loaded(self):
        config = {
            "themes": {
                "custom-light": {
                    "primary": "#111111",
                    "background": "#222222",
                    "dark": False,
                }
            }
        }
        themes = load_themes(config)
        self.assertIn("custom-light", themes)
        self.assertEqual(themes["custom-light"].background, "#222222")
        self.assertFalse(themes["custom-light"].dark)

    def test_invalid_theme_is_ignored(self):
        themes = load_themes({"themes": {"broken": {"no_such_field": "x"}}})
        self.assertNotIn("broken", themes)
        self.assertEqual(set(themes), set(DEFAULT_THEMES))

    def test_toggle(self):
        themes = load_themes()
        self.assertEqual(toggled_theme(themes, DARK_THEME), LIGHT_THEME)
        self.assertEqual(toggled_theme(themes, LIGHT_THEME), DARK_THEME)
        self.assertEqual(toggled_theme(themes, "unknown"), LIGHT_THEME)


if __name__ == "__main__":
    unittest.main()
