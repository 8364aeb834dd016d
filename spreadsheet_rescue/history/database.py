import logging
from typing import Optional

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Engine,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    insert,
    select,
)
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from spreadsheet_rescue.history.base import BaseHistorySink
from spreadsheet_rescue.process.log import ProcessedFileRecord
from spreadsheet_rescue.settings import DevConfig, config, get_database_config
from spreadsheet_rescue.utils import retry

logger = logging.getLogger(__name__)


def setup_db(database_url: Optional[str] = None) -> tuple[Engine, MetaData]:
    db_config = get_database_config()
    url = database_url or db_config["sqlalchemy.url"]

    engine_kwargs = {
        "url": url,
        "echo": db_config["sqlalchemy.echo"],
        "future": db_config["sqlalchemy.future"],
        "connect_args": db_config.get("sqlalchemy.connect_args", {}),
    }
    if url.startswith("sqlite") and ":memory:" in url:
        # one shared connection, otherwise every checkout sees an empty database
        engine_kwargs["poolclass"] = StaticPool
    elif not url.startswith("sqlite"):
        engine_kwargs["pool_size"] = db_config.get("sqlalchemy.pool_size", 5)
        engine_kwargs["max_overflow"] = db_config.get("sqlalchemy.max_overflow", 10)
        engine_kwargs["pool_timeout"] = db_config.get("sqlalchemy.pool_timeout", 30)

    engine = create_engine(**engine_kwargs)
    metadata = MetaData()

    return engine, metadata


def define_tables(metadata: MetaData) -> Table:
    processed_files = Table(
        "processed_files",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("file_name", String(255), nullable=False),
        Column("original_file_name", String(255), nullable=False),
        Column("column_mapping", JSON, nullable=False),
        Column("total_records", Integer, nullable=False),
        Column("valid_records", Integer, nullable=False),
        Column("rejected_records", Integer, nullable=False),
        Column("created_at", DateTime(timezone=True), nullable=False),
    )
    Index(
        "idx_processed_files_original_file_name",
        processed_files.c.original_file_name,
        processed_files.c.id,
    )
    return processed_files


def create_tables(metadata: MetaData, engine: Engine, tables: list[Table]) -> None:
    if isinstance(config, DevConfig):
        metadata.drop_all(engine, tables=tables)
    metadata.create_all(engine, tables=tables)


class DatabaseHistorySink(BaseHistorySink):
    """Stores processed-file records in the ``processed_files`` table.

    Nothing touches the database until the first ``record`` or ``list_records``
    call, so an unreachable store only surfaces inside those calls.
    """

    def __init__(self, engine: Optional[Engine] = None, metadata: Optional[MetaData] = None):
        if engine is None:
            engine, metadata = setup_db()
        self.engine: Engine = engine
        self.metadata: MetaData = metadata or MetaData()
        self.Session: sessionmaker[Session] = sessionmaker(bind=self.engine)
        self.table: Table = define_tables(self.metadata)
        self.tables_created: bool = False

    def _ensure_tables(self) -> None:
        if not self.tables_created:
            create_tables(self.metadata, self.engine, [self.table])
            self.tables_created = True

    @retry()
    def record(self, record: ProcessedFileRecord) -> None:
        self._ensure_tables()
        values = record.model_dump(exclude={"id"})
        with self.Session() as session:
            result = session.execute(insert(self.table).values(**values))
            session.commit()
        record.id = result.inserted_primary_key[0]
        logger.info(f"Recorded processed file {record.file_name} (id={record.id})")

    def list_records(self, limit: int = 50) -> list[ProcessedFileRecord]:
        self._ensure_tables()
        stmt = select(self.table).order_by(self.table.c.id.desc()).limit(limit)
        with self.Session() as session:
            rows = session.execute(stmt).mappings().all()
        return [ProcessedFileRecord(**row) for row in rows]
