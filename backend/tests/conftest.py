from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sipal.core.database import reset_db
from sipal.main import app


@pytest.fixture
def client():
    reset_db()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def student_ids(client):
    return {row["nim"]: row["id"] for row in client.get("/students").json()}
