"""
Config Manager

Installation configuration with include system support.
Loads modular YAML files and turns them into an InstallationConfig.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union

from engine.sequence_runner import SequenceRunner
from models.errors import ConfigLoadError
from models.installation import InstallationConfig, UniverseDefinition
from models.universe import PhysicalRange
from universe_layer.universe_mapping import UniverseMapping
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)


class ConfigManager:
    """
    Installation configuration manager with include system support

    Loads the installation YAML and processes the include: directive to merge
    modular YAML files (e.g. boards.yaml + universes.yaml). The result is an
    explicit InstallationConfig object; nothing is stored globally.

    Example:
        config = ConfigManager("config/installation.yaml")
        installation = config.load()

        mapping = config.build_mapping()
        runner = config.build_runner()

    Schema:
        boards:
          - [10, 8, 19]        # board 0: pixels per strand
        universes:
          - name: one
            ranges:
              - {board: 0, strand: 2, start: 3, size: 4}
    """

    def __init__(
        self,
        config_path: Union[str, Path] = "config/installation.yaml",
        defaults_path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to the installation YAML
            defaults_path: Optional fallback file used when config_path fails to load
        """
        self.config_path = Path(config_path)
        self.defaults_path = Path(defaults_path) if defaults_path else None
        self.data: Dict = {}
        self.installation: Optional[InstallationConfig] = None

    def load(self) -> InstallationConfig:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main installation file
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fall back to defaults_path (if given) on failure
        5. Parse into InstallationConfig

        Raises:
            ConfigLoadError: File missing, unreadable or malformed
        """
        try:
            self.data = self._load_file(self.config_path)
        except ConfigLoadError as ex:
            if not self.defaults_path:
                raise
            log.error("Failed to load installation config", error=ex.message)
            log.warn("Falling back to defaults", path=str(self.defaults_path))
            self.data = self._load_file(self.defaults_path)

        self.installation = self._parse_installation(self.data)
        log.info(
            "Installation loaded",
            boards=len(self.installation.boards),
            strands=self.installation.strand_count,
            universes=len(self.installation.universes),
        )
        return self.installation

    def _load_file(self, path: Path) -> Dict:
        main_config = self._read_yaml(path)

        if 'include' in main_config:
            log.info("Using include-based configuration")
            return self._load_with_includes(main_config['include'], path.parent)

        log.info("Using monolithic configuration")
        return main_config

    def _read_yaml(self, path: Path) -> Dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigLoadError(str(path), "file not found") from None
        except yaml.YAMLError as ex:
            raise ConfigLoadError(str(path), f"invalid YAML: {ex}") from ex

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(str(path), "top level must be a mapping")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["boards.yaml", "universes.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files override earlier keys)
        """
        merged = {}

        for filename in include_list:
            file_data = self._read_yaml(config_dir / filename)
            if file_data:
                merged.update(file_data)
                log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Parsing =====

    def _parse_installation(self, data: Dict) -> InstallationConfig:
        source = str(self.config_path)

        boards_raw = data.get("boards", [])
        if not isinstance(boards_raw, list):
            raise ConfigLoadError(source, "'boards' must be a list")
        try:
            boards = [[int(count) for count in strands] for strands in boards_raw]
        except (TypeError, ValueError) as ex:
            raise ConfigLoadError(source, f"invalid board layout: {ex}") from ex
        if not boards:
            log.warn("No boards defined in config!")

        universes = []
        for universe_dict in data.get("universes", []) or []:
            try:
                ranges = [PhysicalRange.from_dict(r) for r in universe_dict.get("ranges", [])]
                universes.append(UniverseDefinition(name=str(universe_dict["name"]), ranges=ranges))
            except (KeyError, TypeError, ValueError, AttributeError) as ex:
                raise ConfigLoadError(source, f"invalid universe entry {universe_dict!r}: {ex}") from ex

        if not universes:
            log.warn("No universes defined in config!")

        return InstallationConfig(boards=boards, universes=universes)

    # ===== Builders =====

    def _require_installation(self) -> InstallationConfig:
        if self.installation is None:
            return self.load()
        return self.installation

    def build_mapping(self) -> UniverseMapping:
        """UniverseMapping with every configured universe registered"""
        return UniverseMapping.from_config(self._require_installation())

    def build_runner(self) -> SequenceRunner:
        """SequenceRunner sized to the configured universes"""
        return SequenceRunner(self._require_installation().universe_sizes())
