import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from spreadsheet_rescue.exception.base import BaseFileError
from spreadsheet_rescue.exception.exceptions import (
    InvalidColumnMappingError,
    WorkflowStateError,
)
from spreadsheet_rescue.history.base import BaseHistorySink
from spreadsheet_rescue.mapping.base import (
    ContactsColumnMapping,
    TransactionColumnMapping,
)
from spreadsheet_rescue.mapping.detect import detect_contacts_mapping
from spreadsheet_rescue.notify.base import AlertLevel, BaseNotifier
from spreadsheet_rescue.notify.factory import NotifierFactory
from spreadsheet_rescue.pipeline.models import OutputFile, ProcessingStats, RunResult
from spreadsheet_rescue.pipeline.read.factory import ReaderFactory
from spreadsheet_rescue.pipeline.runner import PipelineRunner
from spreadsheet_rescue.utils import get_file_name

logger = logging.getLogger(__name__)


class AppStep(Enum):
    UPLOAD = 0
    COLUMN_MAPPING = 1
    CONTACTS_CONFIRMATION = 2
    CONTACTS_MAPPING = 3
    PROCESSING = 4
    COMPLETE = 5


class SessionStats(BaseModel):
    total_files: int = 0
    total_records: int = 0
    valid_records: int = 0
    rejected_records: int = 0

    def add(self, stats: ProcessingStats) -> None:
        self.total_files += 1
        self.total_records += stats.total_records
        self.valid_records += stats.valid_records
        # duplicates count as rejected at the session level
        self.rejected_records += stats.rejected_records + (stats.duplicate_records or 0)


_BACK_STEPS = {
    AppStep.COLUMN_MAPPING: AppStep.UPLOAD,
    AppStep.CONTACTS_CONFIRMATION: AppStep.COLUMN_MAPPING,
    AppStep.CONTACTS_MAPPING: AppStep.CONTACTS_CONFIRMATION,
}


class ImportSession:
    """One upload worth of state: the raw grid, both runs and the running totals.

    upload -> column mapping -> (contacts confirmation -> contacts mapping) -> complete
    """

    def __init__(
        self,
        notifier: Optional[BaseNotifier] = None,
        history_sink: Optional[BaseHistorySink] = None,
        runner: Optional[PipelineRunner] = None,
        output_format: Optional[str] = None,
    ):
        self.notifier: BaseNotifier = notifier or NotifierFactory.create_notifier()
        self.runner: PipelineRunner = runner or PipelineRunner(
            history_sink=history_sink,
            notifier=self.notifier,
            output_format=output_format,
        )
        self.reset()

    def reset(self) -> None:
        self.step: AppStep = AppStep.UPLOAD
        self.file_name: Optional[str] = None
        self.content: Optional[bytes] = None
        self.column_mapping: Optional[TransactionColumnMapping] = None
        self.raw_grid: Optional[list[list]] = None
        self.has_contact_data: bool = False
        self.transaction_run: Optional[RunResult] = None
        self.contacts_run: Optional[RunResult] = None
        self.stats: Optional[SessionStats] = None
        self.error: Optional[Exception] = None

    @property
    def files(self) -> list[OutputFile]:
        runs = [run for run in (self.transaction_run, self.contacts_run) if run]
        return [output for run in runs for output in run.files]

    def _require(self, *steps: AppStep) -> None:
        if self.step not in steps:
            raise WorkflowStateError(
                f"Cannot do this in step {self.step.name}, expected one of: "
                f"{', '.join(step.name for step in steps)}"
            )

    def _checked(self, mapping, title: str) -> bool:
        try:
            mapping.validate_complete()
        except InvalidColumnMappingError as e:
            logger.warning(f"{title}: {e}")
            self.notifier.notify(AlertLevel.ERROR, title, str(e))
            return False
        return True

    def select_file(self, file_name: str, content: bytes) -> bool:
        self._require(AppStep.UPLOAD)
        if not ReaderFactory.is_supported_file(file_name):
            self.notifier.notify(
                AlertLevel.ERROR,
                "Invalid file type",
                "Please upload an Excel or CSV file",
                details={"file_name": get_file_name(file_name)},
            )
            return False

        self.file_name = file_name
        self.content = content
        self.step = AppStep.COLUMN_MAPPING
        return True

    def complete_column_mapping(
        self, mapping: TransactionColumnMapping
    ) -> Optional[RunResult]:
        self._require(AppStep.COLUMN_MAPPING)
        if not self._checked(mapping, "Invalid column mapping"):
            return None

        self.column_mapping = mapping
        self.step = AppStep.PROCESSING
        self.error = None
        try:
            run = self.runner.run_transactions(self.file_name, self.content, mapping)
        except BaseFileError as e:
            self.error = e
            self.notifier.notify(
                AlertLevel.ERROR,
                "Error processing file",
                str(e),
                details={"error_type": e.error_type},
            )
            self.step = AppStep.UPLOAD
            return None
        except Exception as e:
            logger.exception(f"Unexpected error processing {self.file_name}: {e}")
            self.error = e
            self.notifier.notify(AlertLevel.ERROR, "Error processing file", str(e))
            self.step = AppStep.COMPLETE
            return None

        self.transaction_run = run
        self.raw_grid = run.raw_grid
        self.has_contact_data = run.result.has_contact_data
        self.stats = SessionStats()
        self.stats.add(run.result.stats)

        if self.has_contact_data:
            self.step = AppStep.CONTACTS_CONFIRMATION
        else:
            self._complete("Transaction file processed successfully.")
        return run

    def confirm_contacts(self, generate: bool) -> None:
        self._require(AppStep.CONTACTS_CONFIRMATION)
        if generate:
            self.step = AppStep.CONTACTS_MAPPING
        else:
            self._complete("Transaction file processed successfully.")

    def suggest_contacts_mapping(self) -> ContactsColumnMapping:
        if not self.raw_grid:
            raise WorkflowStateError("No file has been processed yet")
        return detect_contacts_mapping(self.raw_grid[0])

    def complete_contacts_mapping(
        self, mapping: ContactsColumnMapping
    ) -> Optional[RunResult]:
        self._require(AppStep.CONTACTS_MAPPING)
        if not self._checked(mapping, "Invalid contacts mapping"):
            return None

        self.step = AppStep.PROCESSING
        try:
            run = self.runner.run_contacts(
                self.raw_grid, mapping, source_filename=get_file_name(self.file_name)
            )
        except Exception as e:
            logger.exception(f"Error generating contacts file: {e}")
            self.error = e
            self.notifier.notify(AlertLevel.ERROR, "Error generating contacts file", str(e))
            self.step = AppStep.COMPLETE
            return None

        self.contacts_run = run
        self.stats.add(run.result.stats)
        self._complete("Both files processed successfully.")
        return run

    def _complete(self, message: str) -> None:
        self.step = AppStep.COMPLETE
        self.notifier.notify(
            AlertLevel.SUCCESS,
            "Success",
            message,
            details=self.stats.model_dump() if self.stats else None,
        )

    def back(self) -> AppStep:
        self.step = _BACK_STEPS.get(self.step, self.step)
        return self.step
