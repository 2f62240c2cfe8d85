import logging
import os
from typing import Optional

import yaml

from pagewalk.domain.fetch_config import FetchConfig
from pagewalk.exceptions import ConfigNotFoundError
from pagewalk.services.fetch_config_parser import FetchConfigParser

logger = logging.getLogger(__name__)


class FetchConfigStore:
    """Filesystem/YAML IO for fetch config files.

    Responsibility: locate, read, and parse YAML files on disk.
    """

    def __init__(self, *, configs_dir: str, parser: Optional[FetchConfigParser] = None):
        self.configs_dir = configs_dir
        self.parser = parser or FetchConfigParser()

    def list_config_files(self) -> list[str]:
        if not os.path.isdir(self.configs_dir):
            return []
        return sorted(
            fname
            for fname in os.listdir(self.configs_dir)
            if fname.endswith(".yml") or fname.endswith(".yaml")
        )

    def _resolve_path(self, config_path: str) -> str:
        return config_path if os.path.isabs(config_path) else os.path.join(self.configs_dir, config_path)

    def load_yaml_dict(self, config_path: str) -> Optional[dict]:
        """Return parsed YAML dict for `config_path`, or None if missing/invalid."""
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            return None
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            logger.exception("Could not read fetch config %s", full_path)
            return None
        return data if isinstance(data, dict) else None

    def _find_file(self, name: str) -> Optional[str]:
        if name.endswith(".yml") or name.endswith(".yaml"):
            return name if os.path.isfile(self._resolve_path(name)) else None
        for ext in (".yml", ".yaml"):
            if os.path.isfile(self._resolve_path(name + ext)):
                return name + ext
        return None

    def load(self, name: str) -> FetchConfig:
        """Load the fetch config stored as `<name>.yml` (or `.yaml`)."""
        config_path = self._find_file(name)
        if config_path is None:
            raise ConfigNotFoundError(name)
        data = self.load_yaml_dict(config_path)
        if data is None:
            raise ConfigNotFoundError(name, "is not a valid YAML mapping")
        cfg = self.parser.parse(config_path=config_path, data=data)
        if cfg is None:
            raise ConfigNotFoundError(name, "has no search.base_url")
        return cfg

    def load_all(self) -> list[FetchConfig]:
        configs = []
        for fname in self.list_config_files():
            data = self.load_yaml_dict(fname)
            if not data:
                continue
            cfg = self.parser.parse(config_path=fname, data=data)
            if cfg is None:
                logger.debug("Skipping %s: not a fetch config", fname)
                continue
            configs.append(cfg)
        return configs
