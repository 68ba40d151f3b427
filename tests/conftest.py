"""Test configuration and fixtures for gdprscan."""

import json
import tempfile
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from gdprscan.db.init import init_db
from gdprscan.db.models import User
from gdprscan.modules.document import HtmlDocument
from gdprscan.modules.history import HistoryManager
from gdprscan.modules.rules import ScanContext

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

BANNER = (
    '<div class="cookie-banner">We use cookies. '
    "<button>Accept all</button> <button>Reject all</button> "
    "<button>Necessary only</button> "
    '<a href="/cookie-policy">Cookie Policy</a></div>'
)

MAIN = (
    "<main>"
    "<p>Our data retention schedule and the legal basis for each purpose are listed below.</p>"
    "<p>You can request my data at any time.</p>"
    "<p>Your right to data portability applies. Data may be transferred internationally.</p>"
    "</main>"
)

FOOTER = (
    "<footer>"
    '<a href="/privacy">Privacy Policy</a> '
    '<a href="/account/delete">Delete my account</a> '
    '<a href="/account/export">Export my data</a> '
    "Contact our DPO: dpo@example.com"
    "</footer>"
)


def build_page(banner: str = BANNER, main: str = MAIN, footer: str = FOOTER, extra: str = "") -> str:
    """Assemble a page from replaceable sections."""
    return f"<html><head><title>Shop</title></head><body>{banner}{main}{extra}{footer}</body></html>"


def consent_entry(accepted: bool = True, age: timedelta = timedelta(days=100)) -> str:
    """A stored consent record ``age`` old relative to FIXED_NOW."""
    timestamp = int((FIXED_NOW - age).timestamp() * 1000)
    return json.dumps({"accepted": accepted, "timestamp": timestamp})


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a mock project directory structure."""
    project_path = temp_dir / "test_project"
    project_path.mkdir()

    (project_path / ".gdprscan").mkdir()
    (project_path / "report").mkdir()

    return project_path


@pytest.fixture
def db_path(project_dir: Path) -> Path:
    """Return the database path for a project."""
    return project_dir / ".gdprscan" / "gdprscan.db"


@pytest.fixture
def initialized_db(db_path: Path) -> Path:
    """Initialize the database and return its path."""
    init_db(db_path)
    return db_path


@pytest.fixture
def history_manager(initialized_db: Path) -> Generator[HistoryManager, None, None]:
    """Create a history manager with an initialized database."""
    manager = HistoryManager(initialized_db)
    yield manager
    manager.close()


@pytest.fixture
def sample_user(history_manager: HistoryManager) -> User:
    """Create a sample user in the database."""
    return history_manager.create_user("dana@example.com")


@pytest.fixture
def scan_context() -> ScanContext:
    """Scan context pinned to a fixed instant."""
    return ScanContext(now=FIXED_NOW)


@pytest.fixture
def compliant_document() -> HtmlDocument:
    """A page that passes every built-in rule."""
    return HtmlDocument(
        html=build_page(),
        url="https://shop.example.com/",
        cookies=["session=abc123; max-age=3600"],
        local_entries={"cookie_consent": consent_entry()},
    )


@pytest.fixture
def bare_document() -> HtmlDocument:
    """A page with no banner, no footer, no disclosures and no storage."""
    return HtmlDocument(html="<html><body><p>Hello</p></body></html>", url="https://bare.example.com/")


@pytest.fixture
def sample_payload() -> dict:
    """A serialized scan result as delivered to the history API."""
    return {
        "url": "https://shop.example.com/",
        "timestamp": 1768478400000,
        "score": 75,
        "violations": [
            {
                "id": "cookie-wall",
                "description": "Cookie wall detected - illegal under GDPR",
                "severity": "high",
                "suggestion": "Cookie walls violate GDPR. Consent must be freely given.",
            },
            {
                "id": "data-retention",
                "description": "No mention of data retention period",
                "severity": "low",
                "suggestion": "State how long you retain personal data and the criteria used",
            },
        ],
        "suggestions": [
            "Cookie walls violate GDPR. Consent must be freely given.",
            "State how long you retain personal data and the criteria used",
        ],
        "stats": {"totalCookies": 2, "rulesChecked": 16},
    }


@pytest.fixture
def page_builder():
    """Return the page assembly helper (sections can be swapped out)."""
    return build_page


@pytest.fixture
def consent_factory():
    """Return a helper that serializes a consent record relative to FIXED_NOW."""
    return consent_entry


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep tests away from the real ~/.gdprscan and GDPRSCAN_* variables."""
    for key in (
        "GDPRSCAN_API_URL",
        "GDPRSCAN_API_TOKEN",
        "GDPRSCAN_DATA_DIR",
        "GDPRSCAN_USER_EMAIL",
        "GDPRSCAN_RULE_BUDGET_MS",
        "GDPRSCAN_HTTP_TIMEOUT",
        "GDPRSCAN_HISTORY_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home
