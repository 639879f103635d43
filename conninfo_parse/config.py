from pathlib import Path
import importlib.metadata
import logging

import packaging.version
import yaml
from pydantic import ValidationError

from .config_model import ConfigModel
from .exceptions import ConninfoConfigError
from .renderer import OutputFormat

try:
    CONNINFO_PARSE_VERSION = packaging.version.Version(importlib.metadata.version("conninfo-parse"))
except importlib.metadata.PackageNotFoundError:
    CONNINFO_PARSE_VERSION = packaging.version.Version("0.0.0")


logger = logging.getLogger(__name__)


class ConninfoConfig:
    """A class to hold configuration settings."""

    def __init__(self, *, validate: bool = True, **kwargs: dict) -> None:
        """Initialize the configuration with key-value pairs.

        Args:
            validate: Whether to check the minimum required version. Defaults to True.
            **kwargs: Key-value pairs representing configuration settings.

        Raises:
            ConninfoConfigError: If the configuration is invalid.

        """
        try:
            self.config = ConfigModel(**kwargs)
        except ValidationError as e:
            logger.error("Config validation error: %s", e)
            raise ConninfoConfigError(e) from e

        if (
            validate
            and self.config.minimum_version
            and CONNINFO_PARSE_VERSION < self.config.minimum_version
        ):
            raise ConninfoConfigError(
                f"Minimum required version of conninfo-parse is {self.config.minimum_version}, but the current version is {CONNINFO_PARSE_VERSION}. Please upgrade conninfo-parse."
            )

    @classmethod
    def from_yaml(cls, file_path: str | Path, *, validate: bool = True) -> "ConninfoConfig":
        """Create a ConninfoConfig instance from a YAML file.

        Args:
            file_path: The path to the YAML file.
            validate: Whether to check the minimum required version.

        Returns:
            ConninfoConfig: An instance of the ConninfoConfig class.

        Raises:
            ConninfoConfigError: If the file does not exist, is not valid YAML or
                does not hold a valid configuration.

        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise ConninfoConfigError(f"Configuration file `{file_path}` does not exist.")

        try:
            with file_path.open() as file:
                data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConninfoConfigError(f"Invalid YAML in `{file_path}`: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConninfoConfigError(f"Configuration file `{file_path}` must contain a mapping.")

        logger.debug("Loaded configuration from %s", file_path)
        return cls(validate=validate, **data)

    @property
    def output_format(self) -> OutputFormat:
        return self.config.output.format

    @property
    def delimiter(self) -> str:
        return self.config.output.delimiter

    @property
    def unavailable_formats(self) -> list[OutputFormat]:
        return list(self.config.output.unavailable_formats or [])

    @property
    def use_defaults(self) -> bool:
        return self.config.resolution.use_defaults

    @property
    def service_file_lookup(self) -> bool:
        return self.config.resolution.service_file_lookup
