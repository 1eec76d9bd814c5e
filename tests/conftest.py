import io

import pytest
from rich.console import Console


@pytest.fixture
def console():
    """Uncolored console writing to a buffer; read it with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)
