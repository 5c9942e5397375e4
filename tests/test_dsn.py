from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from chatmigration.database.dsn import mysql_engine_args, mysql_timezone, postgres_engine_args
from chatmigration.errors import ConfigError


class TestMySQLDsn:
    def test_go_driver_dsn(self):
        url, connect_args = mysql_engine_args(
            "bot:s3cret@tcp(mariadb:3306)/bot?charset=utf8mb4&parseTime=True&loc=Local")

        assert url.drivername == 'mysql+pymysql'
        assert url.username == 'bot'
        assert url.password == 's3cret'
        assert url.host == 'mariadb'
        assert url.port == 3306
        assert url.database == 'bot'
        assert dict(url.query) == {'charset': 'utf8mb4'}
        assert connect_args == {}

    def test_password_with_special_characters(self):
        url, _ = mysql_engine_args("bot:p@ss/w:rd@tcp(db:3306)/bot")

        assert url.username == 'bot'
        assert url.password == 'p@ss/w:rd'
        assert url.host == 'db'

    def test_location_with_slash(self):
        url, _ = mysql_engine_args("bot:pw@tcp(db)/bot?loc=Asia/Seoul&charset=utf8")

        assert url.database == 'bot'
        assert url.port is None
        assert dict(url.query) == {'charset': 'utf8'}

    def test_unix_socket(self):
        url, _ = mysql_engine_args("bot:pw@unix(/run/mysqld/mysqld.sock)/bot")

        assert url.host is None
        assert dict(url.query) == {'unix_socket': '/run/mysqld/mysqld.sock'}

    def test_ipv6_address(self):
        url, _ = mysql_engine_args("bot:pw@tcp([::1]:3307)/bot")

        assert url.host == '::1'
        assert url.port == 3307

    def test_url_form(self):
        url, _ = mysql_engine_args("mysql://bot:pw@db:3306/bot?charset=utf8mb4")

        assert url.drivername == 'mysql+pymysql'
        assert url.database == 'bot'

    def test_unsupported_scheme(self):
        with pytest.raises(ConfigError, match='scheme'):
            mysql_engine_args("postgres://bot:pw@db/bot")

    def test_unsupported_protocol(self):
        with pytest.raises(ConfigError, match='protocol'):
            mysql_engine_args("bot:pw@udp(db:3306)/bot")

    def test_garbage(self):
        with pytest.raises(ConfigError):
            mysql_engine_args("not a dsn")


class TestPostgresDsn:
    def test_url_form(self):
        url, connect_args = postgres_engine_args("postgres://bot:pw@pg:5432/bot?sslmode=disable")

        assert url.drivername == 'postgresql+psycopg2'
        assert url.host == 'pg'
        assert url.database == 'bot'
        assert dict(url.query) == {'sslmode': 'disable'}
        assert connect_args == {}

    def test_keyword_form_passed_to_driver(self):
        dsn = "host=pg user=bot password=pw dbname=bot sslmode=require"

        url, connect_args = postgres_engine_args(dsn)

        assert url.drivername == 'postgresql+psycopg2'
        assert url.host is None
        assert connect_args == {'dsn': dsn}

    def test_unsupported_scheme(self):
        with pytest.raises(ConfigError, match='scheme'):
            postgres_engine_args("mysql://bot:pw@db/bot")

    def test_garbage(self):
        with pytest.raises(ConfigError):
            postgres_engine_args("pg")


class TestMySQLTimezone:
    def test_defaults_to_utc(self):
        assert mysql_timezone("bot:pw@tcp(db:3306)/bot?parseTime=True") is timezone.utc

    def test_url_form_is_utc(self):
        assert mysql_timezone("mysql://bot:pw@db:3306/bot") is timezone.utc

    def test_named_location(self):
        assert mysql_timezone("bot:pw@tcp(db)/bot?parseTime=True&loc=Asia%2FSeoul") == ZoneInfo('Asia/Seoul')

    def test_local(self):
        tz = mysql_timezone("bot:pw@tcp(db)/bot?loc=Local")

        assert tz == datetime.now().astimezone().tzinfo

    def test_unknown_location(self):
        with pytest.raises(ConfigError, match='loc'):
            mysql_timezone("bot:pw@tcp(db)/bot?loc=Mars/Olympus")


class TestMalformedPort:
    def test_mysql_url(self):
        with pytest.raises(ConfigError, match='V1_DSN'):
            mysql_engine_args("mysql://bot:pw@db:port/bot")

    def test_postgres_url(self):
        with pytest.raises(ConfigError, match='V2_DSN'):
            postgres_engine_args("postgres://bot:pw@pg:port/bot")
