from __future__ import annotations

import io

import pytest

from htmllite import messages as m


@pytest.fixture
def messages():
    # Collects everything the messages layer prints, without colors.
    with m.withMessageState(io.StringIO(), printMode="plain") as fh:
        yield fh
