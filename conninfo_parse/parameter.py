from enum import Enum


class ValueSource(Enum):
    """An enumeration of the places a parameter value can come from.

    Attributes:
        CONNINFO (str): The value was given in the conninfo string.
        SERVICE (str): The value was read from a connection service file.
        ENVIRONMENT (str): The value was read from an environment variable.
        DEFAULT (str): The value is the compiled-in default.
        NONE (str): No value was found.

    """

    CONNINFO = "conninfo"
    SERVICE = "service"
    ENVIRONMENT = "environment"
    DEFAULT = "default"
    NONE = "none"


class ParameterSpec:
    """A class to define a recognized connection parameter.

    Instances are read-only once created.
    """

    __slots__ = ("_keyword", "_envvar", "_compiled_default", "_label", "_is_secret")

    def __init__(
        self,
        keyword: str,
        envvar: str | None = None,
        compiled_default: str | None = None,
        label: str = "",
        *,
        is_secret: bool = False,
    ) -> None:
        """Initialize a ParameterSpec instance.

        Args:
            keyword: The conninfo keyword, e.g. ``host``.
            envvar: The environment variable consulted when the keyword is not given.
            compiled_default: The value used when neither the string nor the environment supply one.
            label: A human readable label.
            is_secret: Whether the value should be treated as a secret (e.g. a password).

        Raises:
            ValueError: If the keyword is empty.

        """
        if not keyword:
            raise ValueError("A parameter keyword cannot be empty.")
        self._keyword = keyword
        self._envvar = envvar
        self._compiled_default = compiled_default
        self._label = label
        self._is_secret = is_secret

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def envvar(self) -> str | None:
        return self._envvar

    @property
    def compiled_default(self) -> str | None:
        return self._compiled_default

    @property
    def label(self) -> str:
        return self._label

    @property
    def is_secret(self) -> bool:
        return self._is_secret

    def __repr__(self) -> str:
        """Return a string representation of the ParameterSpec instance."""
        return f"ParameterSpec({self.keyword}, envvar: {self.envvar}, default: {self.compiled_default})"

    def __eq__(self, other: "ParameterSpec") -> bool:
        """Check if two ParameterSpec instances are equal."""
        if not isinstance(other, ParameterSpec):
            return NotImplemented
        return (
            self.keyword == other.keyword
            and self.envvar == other.envvar
            and self.compiled_default == other.compiled_default
            and self.label == other.label
            and self.is_secret == other.is_secret
        )

    def __hash__(self) -> int:
        return hash(self.keyword)


class ParsedParameter:
    """A keyword of the catalog together with its resolved value.

    The value is None when no source supplied one.
    """

    def __init__(
        self, keyword: str, value: str | None, source: ValueSource = ValueSource.NONE
    ) -> None:
        self.keyword = keyword
        self.value = value
        self.source = source

    @property
    def is_present(self) -> bool:
        """Whether the parameter has a value and therefore appears in the output."""
        return self.value is not None

    def __repr__(self) -> str:
        return f"<{self.keyword}={self.value!r} ({self.source.value})>"

    def __eq__(self, other: "ParsedParameter") -> bool:
        if not isinstance(other, ParsedParameter):
            return NotImplemented
        return self.keyword == other.keyword and self.value == other.value
