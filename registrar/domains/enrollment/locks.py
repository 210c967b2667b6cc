# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-section locks serializing registrations within one process."""

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator


class SectionLockRegistry:
    """Registry of one ``asyncio.Lock`` per section.

    Registrations for the same section run their checks and insert one
    at a time; registrations for different sections proceed concurrently.
    Must be shared by every coordinator in the process.
    """

    def __init__(self) -> None:
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def get(self, section_id: str) -> asyncio.Lock:
        """Get the lock for a section, creating it on first use."""
        return self._locks[section_id]

    @asynccontextmanager
    async def hold(self, section_id: str) -> AsyncIterator[None]:
        """Hold the section's lock for the duration of the block."""
        async with self._locks[section_id]:
            yield

    def __len__(self) -> int:
        return len(self._locks)
