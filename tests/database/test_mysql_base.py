import mysql.connector
import pytest

from src.geoattend.geoattend.core.exceptions import StoreError
from src.geoattend.geoattend.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.geoattend.geoattend.database.mysql_base import db_cursor
from tests.fakes import FakeConn, FakeConnFactory, FakeCursor


def test_commits_and_closes_on_success():
    conn = FakeConn(FakeCursor())

    with db_cursor(FakeConnFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.commits == 1 and conn.closed and not conn.rolled_back


def test_driver_error_becomes_store_error_and_rolls_back():
    conn = FakeConn(FakeCursor(fail_with=mysql.connector.Error("lost connection")))

    with pytest.raises(StoreError):
        with db_cursor(FakeConnFactory(conn)) as (_, cur):
            cur.execute("UPDATE x SET y=1")

    assert conn.rolled_back and conn.closed and conn.commits == 0


def test_unreachable_database_is_store_error():
    with pytest.raises(StoreError):
        with db_cursor(FakeConnFactory(connect_error=mysql.connector.Error("refused"))):
            pass


def test_integrity_error_passes_through_for_repositories():
    conn = FakeConn(FakeCursor(fail_with=mysql.connector.IntegrityError("duplicate")))

    with pytest.raises(mysql.connector.IntegrityError):
        with db_cursor(FakeConnFactory(conn)) as (_, cur):
            cur.execute("INSERT ...")

    assert conn.rolled_back


def test_schema_splitter_skips_comments_and_db_selection():
    sql = """
    -- header; with a semicolon
    CREATE DATABASE IF NOT EXISTS geoattend_db;
    USE geoattend_db;
    CREATE TABLE a (x VARCHAR(3) DEFAULT ';');
    CREATE TABLE b (y INT);
    """

    statements = list(_iter_sql_statements(_strip_create_db_and_use(sql)))

    assert statements == ["CREATE TABLE a (x VARCHAR(3) DEFAULT ';')", "CREATE TABLE b (y INT)"]
