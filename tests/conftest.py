import pytest

from ecrimage.core import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    # main() reconfigures logging onto the captured stderr of its test.
    configure_logging("CRITICAL")
    yield
    configure_logging("CRITICAL")
