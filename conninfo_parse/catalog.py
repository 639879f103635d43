"""The catalog of connection parameters understood by the parser."""

from collections.abc import Iterable, Iterator

from .parameter import ParameterSpec


class Catalog:
    """An immutable, ordered collection of parameter specifications.

    The order in which the specifications are given is the order in which
    parsed parameters are returned and rendered.
    """

    def __init__(self, specs: Iterable[ParameterSpec]) -> None:
        """Initialize the catalog.

        Args:
            specs: The parameter specifications, in output order.

        Raises:
            ValueError: If two specifications share the same keyword.

        """
        self._specs = tuple(specs)
        self._by_keyword = {}
        for spec in self._specs:
            if spec.keyword in self._by_keyword:
                raise ValueError(f"Duplicate keyword in catalog: {spec.keyword}")
            self._by_keyword[spec.keyword] = spec

    def lookup(self, keyword: str) -> ParameterSpec | None:
        """Return the specification for a keyword, or None if it is not recognized.

        The match is exact and case-sensitive.
        """
        return self._by_keyword.get(keyword)

    def all(self) -> tuple[ParameterSpec, ...]:
        """Return all specifications in catalog order."""
        return self._specs

    def keywords(self) -> list[str]:
        return [spec.keyword for spec in self._specs]

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._by_keyword

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"<Catalog: {len(self)} parameters>"


DEFAULT_PORT = "5432"

# Same keywords, environment variables, defaults and order as libpq.
DEFAULT_CATALOG = Catalog(
    [
        ParameterSpec("service", "PGSERVICE", None, "Database-Service"),
        ParameterSpec("user", "PGUSER", None, "Database-User"),
        ParameterSpec("password", "PGPASSWORD", None, "Database-Password", is_secret=True),
        ParameterSpec("passfile", "PGPASSFILE", None, "Database-Password-File"),
        ParameterSpec("channel_binding", "PGCHANNELBINDING", "prefer", "Channel-Binding"),
        ParameterSpec("connect_timeout", "PGCONNECT_TIMEOUT", None, "Connect-timeout"),
        ParameterSpec("dbname", "PGDATABASE", None, "Database-Name"),
        ParameterSpec("host", "PGHOST", None, "Database-Host"),
        ParameterSpec("hostaddr", "PGHOSTADDR", None, "Database-Host-IP-Address"),
        ParameterSpec("port", "PGPORT", DEFAULT_PORT, "Database-Port"),
        ParameterSpec("client_encoding", "PGCLIENTENCODING", None, "Client-Encoding"),
        ParameterSpec("options", "PGOPTIONS", "", "Backend-Options"),
        ParameterSpec("application_name", "PGAPPNAME", None, "Application-Name"),
        ParameterSpec("fallback_application_name", None, None, "Fallback-Application-Name"),
        ParameterSpec("keepalives", None, None, "TCP-Keepalives"),
        ParameterSpec("keepalives_idle", None, None, "TCP-Keepalives-Idle"),
        ParameterSpec("keepalives_interval", None, None, "TCP-Keepalives-Interval"),
        ParameterSpec("keepalives_count", None, None, "TCP-Keepalives-Count"),
        ParameterSpec("tcp_user_timeout", None, None, "TCP-User-Timeout"),
        ParameterSpec("sslmode", "PGSSLMODE", "prefer", "SSL-Mode"),
        ParameterSpec("sslcompression", "PGSSLCOMPRESSION", "0", "SSL-Compression"),
        ParameterSpec("sslcert", "PGSSLCERT", None, "SSL-Client-Cert"),
        ParameterSpec("sslkey", "PGSSLKEY", None, "SSL-Client-Key"),
        ParameterSpec("sslcertmode", "PGSSLCERTMODE", "allow", "SSL-Client-Cert-Mode"),
        ParameterSpec("sslpassword", None, None, "SSL-Client-Key-Password", is_secret=True),
        ParameterSpec("sslrootcert", "PGSSLROOTCERT", None, "SSL-Root-Certificate"),
        ParameterSpec("sslcrl", "PGSSLCRL", None, "SSL-Revocation-List"),
        ParameterSpec("sslcrldir", "PGSSLCRLDIR", None, "SSL-Revocation-List-Dir"),
        ParameterSpec("sslsni", "PGSSLSNI", "1", "SSL-SNI"),
        ParameterSpec("requirepeer", "PGREQUIREPEER", None, "Require-Peer"),
        ParameterSpec("require_auth", "PGREQUIREAUTH", None, "Require-Auth"),
        ParameterSpec(
            "ssl_min_protocol_version",
            "PGSSLMINPROTOCOLVERSION",
            "TLSv1.2",
            "SSL-Minimum-Protocol-Version",
        ),
        ParameterSpec(
            "ssl_max_protocol_version", "PGSSLMAXPROTOCOLVERSION", None, "SSL-Maximum-Protocol-Version"
        ),
        ParameterSpec("gssencmode", "PGGSSENCMODE", "prefer", "GSSENC-Mode"),
        ParameterSpec("krbsrvname", "PGKRBSRVNAME", "postgres", "Kerberos-service-name"),
        ParameterSpec("gsslib", "PGGSSLIB", None, "GSS-library"),
        ParameterSpec("gssdelegation", "PGGSSDELEGATION", "0", "GSS-delegation"),
        ParameterSpec("replication", None, None, "Replication"),
        ParameterSpec("target_session_attrs", "PGTARGETSESSIONATTRS", "any", "Target-Session-Attrs"),
        ParameterSpec("load_balance_hosts", "PGLOADBALANCEHOSTS", "disable", "Load-Balance"),
    ]
)
