import sys
import os

# Add src/ to sys.path so absolute imports (core.*, formats.*, etc.) work.
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_project_root, "src"))
sys.path.insert(0, _project_root)

import pytest

from core import TableTest, TableTestMetadata


@pytest.fixture()
def forest_test() -> TableTest:
    """Three-line test for candidate Alice, with one line already translated."""
    test = TableTest(TableTestMetadata(title="Forest", candidate_name="Alice", attempt_number=2))
    test.append("The forest was quiet.", "La forêt était calme.")
    test.append("Birds sang.", "")
    test.append("", "")
    return test
