from typing import Any

from spreadsheet_rescue.exception.base import BaseFileError


class NoDataInFileError(BaseFileError):
    def __init__(self, error_values: dict[str, Any]):
        super().__init__(error_values=error_values)

    @property
    def user_message(self) -> str:
        return "File contains no data rows: {source_filename}"


class UnsupportedFileTypeError(BaseFileError):
    def __init__(self, error_values: dict[str, Any]):
        super().__init__(error_values=error_values)

    @property
    def user_message(self) -> str:
        return (
            "Unsupported file type '{extension}' for file: {source_filename}. "
            "Please upload an Excel or CSV file ({supported_extensions})"
        )


class UnreadableFileError(BaseFileError):
    def __init__(self, error_values: dict[str, Any]):
        super().__init__(error_values=error_values)

    @property
    def user_message(self) -> str:
        return "Could not read file {source_filename}: {reason}"


class FileTooLargeError(BaseFileError):
    def __init__(self, error_values: dict[str, Any]):
        super().__init__(error_values=error_values)

    @property
    def user_message(self) -> str:
        return "File {source_filename} is {file_size}, the limit is {max_file_size}"


class InvalidColumnMappingError(Exception):
    pass


class WorkflowStateError(Exception):
    pass
