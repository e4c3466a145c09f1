import logging

import pytest


@pytest.fixture(autouse=True)
def _drop_log_handlers():
    # the CLI installs a handler bound to the captured stderr of one test
    yield
    logging.getLogger().handlers.clear()
