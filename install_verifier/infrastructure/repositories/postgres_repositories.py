"""PostgreSQL-backed repositories for templates and resources."""
from __future__ import annotations

import logging
import warnings
from contextlib import closing
from typing import Any, Callable, Sequence

import pandas as pd
import psycopg2
from pandas.errors import DatabaseError

from install_verifier.config import SETTINGS
from install_verifier.domain.errors import ResolutionError
from install_verifier.domain.models import Resourse, Template
from install_verifier.domain.repositories import ResourseRepository, TemplateRepository
from install_verifier.domain.system_info import DatabaseInfo
from install_verifier.infrastructure.parsing.utils import clean_optional, clean_text

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[DatabaseInfo], Any]

DBAPI_WARNING = "pandas only supports SQLAlchemy connectable"


def connect_postgres(database: DatabaseInfo, timeout: int = SETTINGS.db_connect_timeout) -> Any:
    return psycopg2.connect(
        host=database.host,
        port=database.port,
        dbname=database.name,
        user=database.user,
        password=database.password,
        connect_timeout=timeout,
    )


def read_query(database: DatabaseInfo, query: str, connect: ConnectionFactory = connect_postgres) -> pd.DataFrame:
    try:
        connection = connect(database)
    except psycopg2.Error as exc:
        raise ResolutionError(f"Cannot connect to database {database.name} on {database.host}: {exc}") from exc
    with closing(connection):
        try:
            with warnings.catch_warnings():
                warnings.filterwarnings("ignore", message=DBAPI_WARNING, category=UserWarning)
                return pd.read_sql_query(query, connection)
        except (psycopg2.Error, DatabaseError) as exc:
            raise ResolutionError(f"Query failed on database {database.name}: {exc}") from exc


def frame_to_templates(df: pd.DataFrame) -> Sequence[Template]:
    templates: list[Template] = []
    for _, row in df.iterrows():
        name = clean_text(row.get("name"))
        if not name:
            continue
        templates.append(Template(name=name, version=clean_optional(row.get("version"))))
    return templates


def frame_to_resources(df: pd.DataFrame) -> Sequence[Resourse]:
    resources: list[Resourse] = []
    for _, row in df.iterrows():
        name = clean_text(row.get("name"))
        if not name:
            continue
        resources.append(Resourse(name=name, resource_type=clean_optional(row.get("resource_type"))))
    return resources


class PostgresTemplateRepository(TemplateRepository):
    def __init__(self, query: str = SETTINGS.template_query, connect: ConnectionFactory = connect_postgres) -> None:
        self._query = query
        self._connect = connect

    def list_templates(self, database: DatabaseInfo) -> Sequence[Template]:
        templates = frame_to_templates(read_query(database, self._query, self._connect))
        logger.info("Found %d templates in database %s", len(templates), database.name)
        return templates


class PostgresResourseRepository(ResourseRepository):
    def __init__(self, query: str = SETTINGS.resource_query, connect: ConnectionFactory = connect_postgres) -> None:
        self._query = query
        self._connect = connect

    def list_resources(self, database: DatabaseInfo) -> Sequence[Resourse]:
        resources = frame_to_resources(read_query(database, self._query, self._connect))
        logger.info("Found %d resources in database %s", len(resources), database.name)
        return resources
