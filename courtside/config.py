"""Runtime configuration read from the environment."""
import os
from typing import Optional

from .utils.constants import DEFAULT_DATA_FILE, DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT


class Config:
    """
    Application settings.

    Every value can be overridden through a ``COURTSIDE_*`` environment variable.
    An empty data file path selects the in-memory store.
    """

    def __init__(
        self,
        data_file: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        self.data_file = data_file if data_file is not None else DEFAULT_DATA_FILE
        self.host = host or DEFAULT_HOST
        self.port = int(port) if port is not None else DEFAULT_PORT
        self.log_level = (log_level or DEFAULT_LOG_LEVEL).upper()

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            data_file=os.environ.get("COURTSIDE_DATA_FILE", DEFAULT_DATA_FILE),
            host=os.environ.get("COURTSIDE_HOST", DEFAULT_HOST),
            port=int(os.environ.get("COURTSIDE_PORT", str(DEFAULT_PORT))),
            log_level=os.environ.get("COURTSIDE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

    @property
    def uses_memory_store(self) -> bool:
        return not self.data_file
