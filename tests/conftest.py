from __future__ import annotations

import copy
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1] / "source"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest


_ORDER_DOCUMENT = {
    "customer": [
        {"name": "Ada", "email": "ada@example.com", "tags": ["vip"]},
        {"name": "Lin", "email": None, "tags": []},
    ],
    "meta": {"version": 3, "active": True, "notes": None},
    "total": 12.5,
}


@pytest.fixture
def order_document() -> dict:
    return copy.deepcopy(_ORDER_DOCUMENT)
