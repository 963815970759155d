import os
import tempfile
import unittest
from unittest.mock import patch

from courtside.config import Config
from courtside.services import InMemoryRepository, JsonFileRepository, ServiceFactory


class ConfigTests(unittest.TestCase):
    def test_defaults_select_memory_store(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()

        self.assertEqual(config.host, "127.0.0.1")
        self.assertEqual(config.port, 7122)
        self.assertEqual(config.log_level, "INFO")
        self.assertTrue(config.uses_memory_store)
        self.assertIsInstance(ServiceFactory(config).get_repository(), InMemoryRepository)

    def test_environment_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            env = {
                "COURTSIDE_DATA_FILE": os.path.join(temp_dir, "store.json"),
                "COURTSIDE_PORT": "8080",
                "COURTSIDE_LOG_LEVEL": "debug",
            }
            with patch.dict(os.environ, env):
                config = Config.from_env()

            self.assertEqual(config.port, 8080)
            self.assertEqual(config.log_level, "DEBUG")
            self.assertFalse(config.uses_memory_store)
            self.assertIsInstance(ServiceFactory(config).get_repository(), JsonFileRepository)


if __name__ == "__main__":
    unittest.main()
