from typing import Any, Optional, Sequence

import pendulum
import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from spreadsheet_rescue.history.base import BaseHistorySink, NullHistorySink
from spreadsheet_rescue.mapping.base import (
    ContactsColumnMapping,
    TransactionColumnMapping,
)
from spreadsheet_rescue.notify.base import AlertLevel, BaseNotifier
from spreadsheet_rescue.notify.log import LogNotifier
from spreadsheet_rescue.pipeline.models import PipelineResult, RunResult
from spreadsheet_rescue.pipeline.process.contacts import ContactsProcessor
from spreadsheet_rescue.pipeline.process.transactions import TransactionProcessor
from spreadsheet_rescue.pipeline.read.factory import ReaderFactory
from spreadsheet_rescue.pipeline.write.base import BaseWriter
from spreadsheet_rescue.pipeline.write.factory import WriterFactory
from spreadsheet_rescue.process.log import ProcessedFileRecord
from spreadsheet_rescue.settings import config
from spreadsheet_rescue.utils import get_error_location, get_file_name

logger = structlog.getLogger(__name__)


class PipelineRunner:
    """Decodes an upload, runs a pipeline over it and encodes the two output tables.

    The history sink and notifier are injected. A failing history sink is
    reported to the notifier and never changes the returned result.
    """

    def __init__(
        self,
        history_sink: Optional[BaseHistorySink] = None,
        notifier: Optional[BaseNotifier] = None,
        output_format: Optional[str] = None,
        order_time_format: Optional[str] = None,
        date_format: Optional[str] = None,
    ):
        self.history_sink: BaseHistorySink = history_sink or NullHistorySink()
        self.notifier: BaseNotifier = notifier or LogNotifier()
        self.writer: BaseWriter = WriterFactory.create_writer(output_format)
        self.order_time_format: str = order_time_format or config.ORDER_TIME_FORMAT
        self.date_format: str = date_format or config.DATE_FORMAT

    def read_data(self, file_name: str, content: bytes) -> list[list[Any]]:
        reader = ReaderFactory.create_reader(file_name, content)
        grid = reader.read()
        logger.info(f"Read {reader.rows_read} data rows from {reader.source_filename}")
        return grid

    def encode_result(
        self, result: PipelineResult, purpose: str, raw_grid: Sequence[Sequence[Any]]
    ) -> RunResult:
        now = pendulum.now("UTC")
        return RunResult(
            result=result,
            valid_file=self.writer.write(result.valid_table, purpose, now=now),
            rejected_file=self.writer.write(
                result.rejected_table, f"{purpose}_rejected", now=now
            ),
            raw_grid=[list(row) for row in raw_grid],
        )

    def record_history(self, record: ProcessedFileRecord) -> None:
        try:
            self.history_sink.record(record)
        except Exception as e:
            error_location = get_error_location(e)
            logger.exception(
                f"Failed to record processed file {record.file_name}: {e} at {error_location}"
            )
            self.notifier.notify(
                AlertLevel.WARNING,
                "History not saved",
                "The file was processed, but it could not be added to the import history.",
                details={"file_name": record.file_name, "error": f"{type(e).__name__}: {e}"},
            )

    def run_transactions(
        self, file_name: str, content: bytes, mapping: TransactionColumnMapping
    ) -> RunResult:
        clear_contextvars()
        source_filename = get_file_name(file_name)
        bind_contextvars(source_filename=source_filename, purpose="transaction")
        started_at = pendulum.now("UTC")

        raw_grid = self.read_data(file_name, content)
        result = TransactionProcessor(mapping, self.order_time_format).process(raw_grid)
        run = self.encode_result(result, TransactionProcessor.PURPOSE, raw_grid)

        self.record_history(
            ProcessedFileRecord(
                file_name=run.valid_file.file_name,
                original_file_name=source_filename,
                column_mapping=mapping.mapped_fields(),
                total_records=result.stats.total_records,
                valid_records=result.stats.valid_records,
                rejected_records=result.stats.rejected_records,
            )
        )

        duration = (pendulum.now("UTC") - started_at).total_seconds()
        logger.info(
            f"Transaction pipeline completed for file: {source_filename} - took {duration:.2f} seconds"
        )
        return run

    def run_contacts(
        self,
        raw_grid: Sequence[Sequence[Any]],
        mapping: ContactsColumnMapping,
        source_filename: Optional[str] = None,
    ) -> RunResult:
        clear_contextvars()
        bind_contextvars(source_filename=source_filename, purpose="contacts")

        result = ContactsProcessor(mapping, self.date_format).process(raw_grid)
        run = self.encode_result(result, ContactsProcessor.PURPOSE, raw_grid)
        logger.info(
            f"Contacts pipeline completed: {result.stats.valid_records} unique contacts, "
            f"{result.stats.duplicate_records} duplicates"
        )
        return run
