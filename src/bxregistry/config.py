"""Configuration and environment handling for bxregistry."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Hard limit of the Bitrix24 batch method
BITRIX_BATCH_LIMIT = 50


class Config:
    """Central configuration object."""

    def __init__(self):
        # Load .env file if it exists
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        # Logging
        self.log_level: str = os.getenv("BX_LOG_LEVEL", "INFO").upper()

        # Batch commands
        self.batch_max_commands: int = int(
            os.getenv("BX_BATCH_MAX_COMMANDS", str(BITRIX_BATCH_LIMIT))
        )
        if not 1 <= self.batch_max_commands <= BITRIX_BATCH_LIMIT:
            raise ValueError(
                f"BX_BATCH_MAX_COMMANDS must be between 1 and {BITRIX_BATCH_LIMIT}, "
                f"got {self.batch_max_commands}"
            )
        self.batch_halt: bool = os.getenv("BX_BATCH_HALT", "0") == "1"


# Global config instance
config = Config()
