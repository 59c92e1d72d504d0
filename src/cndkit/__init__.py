# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner, parser and tooling for Compact Node Definition (CND) documents."""

from cndkit.errors import CndError
from cndkit.model.schema import Schema
from cndkit.parser.abstract_parser import ParseError
from cndkit.parser.cnd_parser import parse
from cndkit.scanner.scanner import ScanError

__all__ = [
    "CndError",
    "ParseError",
    "ScanError",
    "Schema",
    "parse",
]
