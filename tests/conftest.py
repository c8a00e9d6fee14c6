import json
from pathlib import Path

import pytest


@pytest.fixture
def system_info_file(tmp_path: Path):
    def write(data: dict) -> Path:
        path = tmp_path / "system_info.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write
