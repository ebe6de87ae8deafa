#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host filesystem for later writing into
RAM.  ROMs are raw big-endian opcodes with no header, so no parsing is done
here.  The system font is built in, so it never needs loading.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging

logger = logging.getLogger(__name__)


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            data = f.read()

        logger.info("Read %d bytes from %s", len(data), filename)
        return data
