import logging
import os
import sys
from pathlib import Path

from tierpass.rules.models import Rules

logger = logging.getLogger(__name__)


class Settings:
    """Runtime settings read from the environment."""

    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("TIERPASS_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "tierpass.db")
        self.rules_path = Path(os.environ.get("TIERPASS_RULES_PATH", str(self.base_dir / "rules.yaml")))


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Exits the process if a required environment variable is missing.
    """
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]
    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Configuration validated (data dir %s)", data_dir)
