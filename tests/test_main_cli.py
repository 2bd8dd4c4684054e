from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from main import main


class MainCliTests(unittest.TestCase):
    def test_export_command_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "chart.png"
            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                code = main(
                    [
                        "export",
                        "--ticks",
                        "5",
                        "--width",
                        "400",
                        "--height",
                        "150",
                        "--chart-type",
                        "scatter",
                        "--seed",
                        "1",
                        "--log-level",
                        "warning",
                        str(out),
                    ]
                )
            self.assertEqual(code, 0)
            with Image.open(out) as image:
                self.assertEqual(image.size, (120, 150))
            self.assertIn("samples=5", stdout.getvalue())
            self.assertIn("type=scatter", stdout.getvalue())
            self.assertIn("Statistics", stdout.getvalue())

    def test_invalid_config_exits(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["export", "--width", "100"])
            with self.assertRaises(SystemExit):
                main(["run", "--ticks", "0"])


if __name__ == "__main__":
    unittest.main()
