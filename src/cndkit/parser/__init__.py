# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for CND documents."""

from cndkit.parser.abstract_parser import AbstractParser, ParseError
from cndkit.parser.cnd_parser import BUILTIN_NAMESPACES, CndParser, parse

__all__ = [
    "AbstractParser",
    "BUILTIN_NAMESPACES",
    "CndParser",
    "ParseError",
    "parse",
]
