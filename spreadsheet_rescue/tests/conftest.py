import os

# Needs to happen before local imports
os.environ["ENV_STATE"] = "test"
import csv
from pathlib import Path
from unittest.mock import MagicMock

import pyexcel
import pytest

from spreadsheet_rescue.history.base import BaseHistorySink
from spreadsheet_rescue.mapping.base import (
    ContactsColumnMapping,
    TransactionColumnMapping,
)
from spreadsheet_rescue.notify.base import BaseNotifier
from spreadsheet_rescue.pipeline.runner import PipelineRunner


@pytest.fixture()
def session_temp_dir(tmp_path_factory):
    return tmp_path_factory.mktemp("test_session")


@pytest.fixture()
def create_csv_file(session_temp_dir):
    file_paths = []

    def _create_csv_file(file_name: str, data: list[list[str]]) -> Path:
        file_path = session_temp_dir / file_name
        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(data)
        file_paths.append(file_path)
        return file_path

    yield _create_csv_file

    for file_path in file_paths:
        if file_path.exists():
            file_path.unlink()


@pytest.fixture()
def create_excel_file(session_temp_dir):
    file_paths = []

    def _create_excel_file(file_name: str, data: list[list]) -> Path:
        file_path = session_temp_dir / file_name
        pyexcel.save_as(array=data, dest_file_name=str(file_path))
        file_paths.append(file_path)
        return file_path

    yield _create_excel_file

    for file_path in file_paths:
        if file_path.exists():
            file_path.unlink()


@pytest.fixture()
def mock_notifier():
    return MagicMock(spec=BaseNotifier)


@pytest.fixture()
def mock_history_sink():
    return MagicMock(spec=BaseHistorySink)


@pytest.fixture()
def runner(mock_history_sink, mock_notifier):
    return PipelineRunner(
        history_sink=mock_history_sink, notifier=mock_notifier, output_format="csv"
    )


@pytest.fixture()
def transaction_mapping():
    """Mapping for fixtures.csv_files.TRANSACTIONS_HEADER."""
    return TransactionColumnMapping(
        mobile="B",
        bill_number="C",
        bill_amount="D",
        order_time="E",
        points_earned="F",
    )


@pytest.fixture()
def contacts_mapping():
    """Mapping for fixtures.csv_files.CONTACTS_HEADER."""
    return ContactsColumnMapping(
        mobile="A",
        name="B",
        email="C",
        birthday="D",
        anniversary="E",
        gender="F",
        points="G",
        tags="H",
    )
