# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""CND text output for parsed schemas."""

from cndkit.writer.cnd_writer import write_cnd

__all__ = ["write_cnd"]
