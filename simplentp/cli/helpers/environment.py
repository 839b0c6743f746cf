"""Loading of .simplentp settings files."""
import os

from simplentp.utils.logger import get_logger

ENV_FILE_NAME = ".simplentp"

log = get_logger(__name__)


class EnvironmentManager:
    """Settings file discovery and loading."""

    @staticmethod
    def find_env_file(start: str = None):
        """Find the nearest .simplentp file, searching up from start (or cwd)."""
        current_path = os.path.realpath(start or os.getcwd())

        while True:
            candidate = os.path.join(current_path, ENV_FILE_NAME)
            if os.path.isfile(candidate):
                return candidate

            parent_path = os.path.dirname(current_path)
            if parent_path == current_path:
                return None
            current_path = parent_path

    @staticmethod
    def load_env_file(start: str = None) -> dict:
        """Load KEY=VALUE lines from the nearest .simplentp file into os.environ.

        Variables already present in the environment win over the file.
        Returns the pairs that were applied.
        """
        path = EnvironmentManager.find_env_file(start)
        if not path:
            return {}

        applied = {}
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    if key and key not in os.environ:
                        os.environ[key] = value.strip()
                        applied[key] = value.strip()
        log.debug("Loaded %d setting(s) from %s", len(applied), path)
        return applied
