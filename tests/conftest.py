from __future__ import annotations

import pytest

from chat_samples import OOC, RADIO, SAY, build_document


@pytest.fixture
def chat_document() -> str:
    return build_document(SAY, OOC, RADIO)
