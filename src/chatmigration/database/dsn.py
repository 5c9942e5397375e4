"""
Translate the connection strings used by the v1 bot into SQLAlchemy engine arguments.

V1_DSN is usually written for the Go MySQL driver, e.g.
``user:pass@tcp(mariadb:3306)/bot?charset=utf8mb4&parseTime=True&loc=Local``.
V2_DSN is either a postgres URL or a libpq keyword string such as
``host=postgres user=bot password=secret dbname=bot sslmode=disable``.
Plain SQLAlchemy URLs are accepted for both.
"""
import re
from datetime import datetime, timezone, tzinfo
from urllib.parse import parse_qsl
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from chatmigration.errors import ConfigError

MYSQL_DRIVER = 'mysql+pymysql'
POSTGRES_DRIVER = 'postgresql+psycopg2'

MYSQL_URL_SCHEMES = ('mysql', 'mysql+pymysql', 'mariadb', 'mariadb+pymysql')
POSTGRES_URL_SCHEMES = ('postgres', 'postgresql', 'postgresql+psycopg2')

# options the Go driver understands that PyMySQL also does
MYSQL_KEPT_PARAMS = ('charset',)

_GO_MYSQL_DSN = re.compile(
    r'^(?:(?P<user>[^:@/]*)(?::(?P<password>.*))?@)?'
    r'(?:(?P<net>[a-z0-9]+)(?:\((?P<addr>[^)]*)\))?)?'
    r'/(?P<dbname>[^?/]*)'
    r'(?:\?(?P<params>.*))?$'
)


def _scheme(dsn: str) -> str | None:
    if '://' not in dsn:
        return None
    return dsn.split('://', 1)[0].lower()


def _split_host_port(addr: str) -> tuple[str | None, int | None]:
    if addr == '':
        return None, None

    # [::1]:3306
    if addr.startswith('['):
        host, _, rest = addr[1:].partition(']')
        port = rest.lstrip(':')
        return host, int(port) if port else None

    host, sep, port = addr.rpartition(':')
    if sep and port.isdigit():
        return host, int(port)

    return addr, None


def mysql_engine_args(dsn: str) -> tuple[URL, dict]:
    scheme = _scheme(dsn)
    if scheme is not None:
        if scheme not in MYSQL_URL_SCHEMES:
            raise ConfigError(f"unsupported V1_DSN scheme: {scheme}")
        try:
            return make_url(dsn).set(drivername=MYSQL_DRIVER), {}
        except (ArgumentError, ValueError) as e:
            raise ConfigError(f"invalid V1_DSN: {e}") from e

    match = _GO_MYSQL_DSN.match(dsn)
    if match is None:
        raise ConfigError("invalid V1_DSN: expected user:password@tcp(host:port)/dbname")

    net = match.group('net') or 'tcp'
    addr = match.group('addr') or ''
    params = dict(parse_qsl(match.group('params') or '', keep_blank_values=True))
    query = {key: value for key, value in params.items() if key in MYSQL_KEPT_PARAMS}

    host, port = None, None
    if net == 'unix':
        query['unix_socket'] = addr
    elif net == 'tcp':
        try:
            host, port = _split_host_port(addr)
        except ValueError as e:
            raise ConfigError(f"invalid V1_DSN address: {addr}") from e
    else:
        raise ConfigError(f"unsupported V1_DSN protocol: {net}")

    url = URL.create(MYSQL_DRIVER,
                     username=match.group('user') or None,
                     password=match.group('password'),
                     host=host,
                     port=port,
                     database=match.group('dbname') or None,
                     query=query)
    return url, {}


def mysql_timezone(dsn: str) -> tzinfo:
    """Zone the v1 DATETIME values were written in, from the Go driver's ``loc`` option.

    The Go driver defaults to UTC, so does this. URL style DSNs have no ``loc``.
    """
    loc = 'UTC'
    if _scheme(dsn) is None:
        match = _GO_MYSQL_DSN.match(dsn)
        if match is not None:
            params = dict(parse_qsl(match.group('params') or ''))
            loc = params.get('loc') or 'UTC'

    if loc == 'UTC':
        return timezone.utc
    if loc == 'Local':
        return datetime.now().astimezone().tzinfo

    try:
        return ZoneInfo(loc)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"invalid V1_DSN loc: {loc}") from e


def postgres_engine_args(dsn: str) -> tuple[URL, dict]:
    scheme = _scheme(dsn)
    if scheme is not None:
        if scheme not in POSTGRES_URL_SCHEMES:
            raise ConfigError(f"unsupported V2_DSN scheme: {scheme}")
        try:
            return make_url(dsn).set(drivername=POSTGRES_DRIVER), {}
        except (ArgumentError, ValueError) as e:
            raise ConfigError(f"invalid V2_DSN: {e}") from e

    if '=' not in dsn:
        raise ConfigError("invalid V2_DSN: expected a postgres URL or key=value pairs")

    # libpq keyword form, psycopg2 parses it itself
    return URL.create(POSTGRES_DRIVER), {'dsn': dsn}
