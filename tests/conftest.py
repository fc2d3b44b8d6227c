"""Global pytest configuration and fixtures."""

# Standard library imports
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Load test environment variables
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

# Third-party imports
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Local imports
from tests.helpers.factories import get_rules_list
from uow_rules_engine.application.config import WorkActionConfiguration, reset_config
from uow_rules_engine.domain.entities.work_validation import WorkValidation


@pytest.fixture
def stop_on_failure_config() -> WorkActionConfiguration:
    """Configuration that stops rule processing at the first failure."""
    return WorkActionConfiguration(stop_rule_processing_on_first_failure=True)


@pytest.fixture
def run_all_config() -> WorkActionConfiguration:
    """Configuration that processes every rule."""
    return WorkActionConfiguration(stop_rule_processing_on_first_failure=False)


@pytest.fixture
def validation() -> WorkValidation:
    """Empty validation context with default configuration."""
    return WorkValidation(WorkActionConfiguration())


@pytest.fixture
def rules_with_failures():
    """Four rules; the second and third fail."""
    return get_rules_list(with_failures=True)


@pytest.fixture
def passing_rules():
    """Four passing rules."""
    return get_rules_list(with_failures=False)


@pytest.fixture
def mock_transaction() -> MagicMock:
    """Opaque transaction handle; the engine must never touch it."""
    return MagicMock(name="transaction")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the configuration singleton between tests."""
    reset_config()
    yield
    reset_config()
