import pytest
import sys
from datetime import date
from pathlib import Path

# Add the repo root to sys.path so we can import logic/ and ui/
ROOT = Path(__file__).resolve().parent.parent
if ROOT.as_posix() not in sys.path:
    sys.path.insert(0, ROOT.as_posix())

from logic import AssignmentRecord


def _rec(emp, project, start, end=None):
    return AssignmentRecord(
        employee_id=emp,
        project_id=project,
        start=date.fromisoformat(start),
        end=date.fromisoformat(end) if end else None,
    )


# Common test fixtures
@pytest.fixture
def rec():
    """Shorthand factory: rec(emp, project, "YYYY-MM-DD", end=None)."""
    return _rec


@pytest.fixture
def today():
    """Fixed reference date for open-ended assignments."""
    return date(2024, 6, 1)


@pytest.fixture
def sample_csv(tmp_path: Path):
    """A small CSV with messy headers and a few bad rows."""
    path = tmp_path / "assignments.csv"
    path.write_text(
        " EmpID , ProjectID ,DateFrom, DateTo\n"
        "143, 12, 2013-11-01, 2014-01-05\n"
        "218, 10, 2012-05-16, NULL\n"
        "143, 10, 2009-01-01, 2011-04-27\n"
        "abc, 10, 2009-01-01, 2011-04-27\n"
        "218, 12, 2013-12-01, 2014-02-01\n"
        "300, 12, , 2014-02-01\n",
        encoding="utf-8",
    )
    return path
