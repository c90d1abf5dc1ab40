"""Environment loading for fakedata.

Centralizes dotenv loading so developers can keep fakedata settings in a
user-level ``.env`` file instead of exporting them in every shell.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Prefix shared by every environment variable fakedata reads
ENV_PREFIX = "FAKEDATA_"

# User config directory (stores .env)
USER_CONFIG_DIR = Path.home() / ".config" / "fakedata"


def load_user_env() -> None:
    """Load environment from the user config directory.

    Loads ${USER_CONFIG_DIR}/.env (typically ~/.config/fakedata/.env).
    Existing environment variables win over values from the file.
    """
    load_dotenv(dotenv_path=USER_CONFIG_DIR / ".env")


def fakedata_environ() -> dict[str, str]:
    """Return the FAKEDATA_* variables currently set."""
    return {k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)}
