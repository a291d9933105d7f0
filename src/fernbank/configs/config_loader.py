"""Registry of survey configurations, with loading from user files."""

import importlib.util
import inspect
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Type, Union

from .base import BaseConfig
from ..genbank.schema import Compartment

logger = logging.getLogger(__name__)


def validate_config(config: BaseConfig) -> Tuple[bool, List[str]]:
    """Check that a survey configuration can drive the pipeline.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    templates = config.get_query_templates()
    if not templates:
        errors.append("No query templates defined")
    for compartment, template in templates.items():
        if not isinstance(compartment, Compartment):
            errors.append(f"Template key {compartment!r} is not a Compartment")
        if not isinstance(template, str) or not template.strip():
            errors.append(f"Empty query template for {compartment}")

    if config.first_query_year > config.last_query_year:
        errors.append(f"Query years run backwards: "
                      f"{config.first_query_year}-{config.last_query_year}")
    if config.last_count_year > config.last_query_year:
        errors.append(f"Count year {config.last_count_year} is after the last query year "
                      f"{config.last_query_year}")
    if config.chunk_size < 1:
        errors.append(f"chunk_size must be positive, got {config.chunk_size}")

    return len(errors) == 0, errors


class ConfigurationLoader:
    """Look up survey configurations by name or import them from Python files."""

    def __init__(self):
        from .ferns import FernConfig

        self._registry: Dict[str, Type[BaseConfig]] = {'ferns': FernConfig}

    def _instantiate(self, config_class: Type[BaseConfig]) -> BaseConfig:
        config = config_class()
        is_valid, errors = validate_config(config)
        if not is_valid:
            raise ValueError(f"Invalid configuration {config.name!r}: {'; '.join(errors)}")
        return config

    def load_config_from_file(self, config_path: Path) -> BaseConfig:
        """Import the first BaseConfig subclass defined in a Python file.

        Args:
            config_path: Path to the Python file

        Returns:
            Instantiated, validated configuration

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file fails to import, defines no configuration
                class, or the configuration is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        module_spec = importlib.util.spec_from_file_location(
            f"fernbank_user_config_{config_path.stem}", config_path)
        if module_spec is None or module_spec.loader is None:
            raise ValueError(f"Not an importable Python file: {config_path}")

        module = importlib.util.module_from_spec(module_spec)
        try:
            module_spec.loader.exec_module(module)
        except Exception as e:
            raise ValueError(f"Error executing configuration file {config_path}: {e}") from e

        candidates = [
            obj for _, obj in inspect.getmembers(module, inspect.isclass)
            if issubclass(obj, BaseConfig) and obj.__module__ == module.__name__
            and not inspect.isabstract(obj)
        ]
        if not candidates:
            raise ValueError(
                f"Configuration file must define a class that inherits from BaseConfig: "
                f"{config_path}"
            )
        if len(candidates) > 1:
            logger.warning(f"{config_path} defines {len(candidates)} configurations, "
                           f"using {candidates[0].__name__}")

        config = self._instantiate(candidates[0])
        logger.info(f"Loaded configuration {config.name!r} from {config_path}")
        return config

    def load_config_by_name(self, config_name: str) -> BaseConfig:
        """Instantiate a registered configuration.

        Raises:
            ValueError: If no configuration is registered under the name
        """
        try:
            config_class = self._registry[config_name]
        except KeyError:
            known = ', '.join(sorted(self._registry))
            raise ValueError(f"Unknown configuration: {config_name} (available: {known})")
        return self._instantiate(config_class)

    def load(self, name_or_path: Union[str, Path]) -> BaseConfig:
        """Load a configuration by registered name, or from a ``.py`` file."""
        if str(name_or_path).endswith('.py'):
            return self.load_config_from_file(Path(name_or_path))
        return self.load_config_by_name(str(name_or_path))

    def register_config(self, name: str, config_class: Type[BaseConfig]):
        """Register a configuration class under a name.

        Raises:
            ValueError: If the class does not inherit from BaseConfig
        """
        if not (inspect.isclass(config_class) and issubclass(config_class, BaseConfig)):
            raise ValueError("Configuration class must inherit from BaseConfig")
        self._registry[name] = config_class

    def list_available_configs(self) -> Dict[str, str]:
        """Map each registered name to its description."""
        return {name: config_class().get_description()
                for name, config_class in sorted(self._registry.items())}


config_loader = ConfigurationLoader()
