#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from panelunits.engine import engine_conf


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def legacy_lookup(monkeypatch):
    """Switch the engine default to the historic target lookup for one test."""
    monkeypatch.setattr(engine_conf, "LEGACY_TARGET_LOOKUP", True)
    return engine_conf


@pytest.fixture
def engine_log(caplog):
    """Capture DEBUG records of the conversion engine."""
    caplog.set_level(logging.DEBUG, logger="panelunits.engine")
    return caplog
