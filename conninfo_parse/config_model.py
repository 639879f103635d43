from typing import List, Optional

import packaging.version
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .renderer import DEFAULT_DELIMITER, OutputFormat


class ConninfoCustomBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class OutputModel(ConninfoCustomBaseModel):
    """OutputModel holds the output settings.

    Attributes:
        format: The default output format.
        delimiter: The column delimiter of the delimited format.
        unavailable_formats: Output formats which may not be requested.
    """

    format: OutputFormat = Field(default=OutputFormat.DELIMITED, description="Output format")
    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1)
    unavailable_formats: Optional[List[OutputFormat]] = []


class ResolutionModel(ConninfoCustomBaseModel):
    """ResolutionModel holds the settings used to resolve values not given in the string.

    Attributes:
        use_defaults: Whether to fall back to the environment and the compiled-in defaults.
        service_file_lookup: Whether to read parameters from the connection service file.
    """

    use_defaults: bool = True
    service_file_lookup: bool = False


class ConfigModel(ConninfoCustomBaseModel):
    """
    ConfigModel represents the main configuration schema.

    Attributes:
        minimum_version: Minimum required version of conninfo-parse.
        output: Output settings.
        resolution: Value resolution settings.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)
    minimum_version: Optional[packaging.version.Version] = Field(
        default=None,
        description="Minimum required version of conninfo-parse.",
    )
    output: OutputModel = Field(default_factory=OutputModel)
    resolution: ResolutionModel = Field(default_factory=ResolutionModel)

    @model_validator(mode="before")
    def parse_minimum_version(cls, values):
        min_ver = values.get("minimum_version") if isinstance(values, dict) else None
        if isinstance(min_ver, (str, int, float)):
            try:
                values["minimum_version"] = packaging.version.Version(str(min_ver))
            except packaging.version.InvalidVersion as e:
                raise ValueError(f"Invalid minimum version: {min_ver}") from e
        return values
