import contextlib
import io
import unittest

import helpers  # noqa: F401
from mazeviz.config import Settings, resolve_settings


def quiet_resolve(argv, environ):
    with contextlib.redirect_stdout(io.StringIO()) as out:
        settings = resolve_settings(argv, environ)
    return settings, out.getvalue()


class TestResolveSettings(unittest.TestCase):
    def test_defaults(self):
        settings, out = quiet_resolve([], {})
        self.assertEqual(settings, Settings())
        self.assertEqual(out, "")
        self.assertIsNone(settings.explain_url)

    def test_env_values(self):
        env = {
            "MAZEVIZ_ROWS": "21",
            "MAZEVIZ_COLS": "41",
            "MAZEVIZ_MAZE": "prims",
            "MAZEVIZ_ALGORITHM": "astar",
            "MAZEVIZ_EXPLAIN_URL": "http://localhost:8000/api/explain",
        }
        settings, _ = quiet_resolve([], env)
        self.assertEqual((settings.rows, settings.cols), (21, 41))
        self.assertEqual(settings.maze, "prims")
        self.assertEqual(settings.algorithm, "astar")
        self.assertEqual(settings.explain_url, "http://localhost:8000/api/explain")

    def test_cli_overrides_env(self):
        settings, _ = quiet_resolve(["--rows=15", "--algorithm=DFS", "--explain-url=http://x/e"],
                                    {"MAZEVIZ_ROWS": "21", "MAZEVIZ_ALGORITHM": "dijkstra"})
        self.assertEqual(settings.rows, 15)
        self.assertEqual(settings.algorithm, "dfs")
        self.assertEqual(settings.explain_url, "http://x/e")

    def test_bad_number_falls_back(self):
        settings, out = quiet_resolve(["--cols=wide"], {})
        self.assertEqual(settings.cols, Settings().cols)
        self.assertIn("cols", out)

    def test_sides_clamped(self):
        settings, _ = quiet_resolve(["--rows=1", "--cols=-4"], {})
        self.assertEqual((settings.rows, settings.cols), (3, 3))

    def test_unknown_names_fall_back(self):
        settings, out = quiet_resolve(["--maze=kruskal", "--algorithm=greedy"], {})
        self.assertEqual(settings.maze, Settings().maze)
        self.assertEqual(settings.algorithm, Settings().algorithm)
        self.assertIn("kruskal", out)
        self.assertIn("greedy", out)

    def test_unrelated_args_ignored(self):
        settings, _ = quiet_resolve(["--verbose", "positional", "--mode=student"], {})
        self.assertEqual(settings, Settings())


if __name__ == '__main__':
    unittest.main()
