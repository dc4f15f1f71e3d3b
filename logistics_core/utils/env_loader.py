"""
Environment variable loading utility.

This module loads ``KEY=value`` pairs from an env file into ``os.environ``
before Django settings are evaluated.
"""
import os
import logging

logger = logging.getLogger(__name__)


def _parse_line(line):
    line = line.strip()
    if not line or line.startswith('#') or '=' not in line:
        return None
    if line.startswith('export '):
        line = line[len('export '):]

    key, value = line.split('=', 1)
    key = key.strip()
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        value = value[1:-1]
    if not key:
        return None
    return key, value


def load_env_from_file(file_path, override=False):
    """
    Load environment variables from a file.

    Variables already present in the environment win unless ``override`` is set,
    so values injected by the process manager are never clobbered.

    Args:
        file_path: Path to the environment variable file.
        override: Replace variables that are already set.

    Returns:
        True if the file was read, False otherwise.
    """
    if not os.path.exists(file_path):
        logger.debug(f"Environment file not found: {file_path}")
        return False

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            loaded = 0
            for line in f:
                parsed = _parse_line(line)
                if parsed is None:
                    continue
                key, value = parsed
                if override or key not in os.environ:
                    os.environ[key] = value
                    loaded += 1
    except OSError as e:
        logger.error(f"Error reading environment file {file_path}: {e}")
        return False

    logger.info(f"Loaded {loaded} environment variables from {file_path}")
    return True


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default=None):
    value = os.getenv(name)
    if not value:
        return list(default or [])
    return [item.strip() for item in value.split(',') if item.strip()]
