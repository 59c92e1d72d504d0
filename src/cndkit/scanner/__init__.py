# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner and token queue for CND documents."""

from cndkit.scanner.scanner import ScanError, Scanner, scan
from cndkit.scanner.token_queue import TokenQueue, TokenQueueError
from cndkit.scanner.tokens import Token, TokenType, type_name

__all__ = [
    "ScanError",
    "Scanner",
    "Token",
    "TokenQueue",
    "TokenQueueError",
    "TokenType",
    "scan",
    "type_name",
]
