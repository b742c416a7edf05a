import unittest

from backtrack_sudoku.config import Settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        s = Settings.from_env({})
        self.assertIsNone(s.max_generation_attempts)
        self.assertEqual(s.api_host, "0.0.0.0")
        self.assertEqual(s.api_port, 8000)
        self.assertFalse(s.api_debug)
        self.assertEqual(s.log_level, "INFO")

    def test_reads_environment(self) -> None:
        s = Settings.from_env({
            "SUDOKU_MAX_GENERATION_ATTEMPTS": "25",
            "SUDOKU_API_HOST": "127.0.0.1",
            "SUDOKU_API_PORT": "9100",
            "SUDOKU_API_DEBUG": "true",
            "SUDOKU_LOG_LEVEL": "debug",
        })
        self.assertEqual(s.max_generation_attempts, 25)
        self.assertEqual(s.api_host, "127.0.0.1")
        self.assertEqual(s.api_port, 9100)
        self.assertTrue(s.api_debug)
        self.assertEqual(s.log_level, "DEBUG")

    def test_bad_integer_names_variable(self) -> None:
        with self.assertRaisesRegex(ValueError, "SUDOKU_API_PORT"):
            Settings.from_env({"SUDOKU_API_PORT": "eighty"})


if __name__ == "__main__":
    unittest.main()
