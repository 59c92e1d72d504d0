# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Base exception shared by the scanner and the parser."""


class CndError(Exception):
    """Raised when CND source text cannot be turned into a schema.

    Attributes:
        message: Description of the problem without position information.
        line: 1-based line number of the error.
        column: 1-based column number of the error.
        offset: 0-based character offset of the error.
        source_name: Optional name of the document (e.g. a file path).
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        offset: int,
        source_name: str | None = None,
    ) -> None:
        location = f"{message} at line {line}, column {column}"
        if source_name:
            location = f"{source_name}: {location}"
        super().__init__(location)
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset
        self.source_name = source_name
