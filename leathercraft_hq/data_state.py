"""
data_state.py — The running dashboard session and everything pages read.
This is the single source of truth for dashboard data.
Every page/callback imports from here; nothing else holds entity state.
"""

import logging
import threading

from leathercraft_hq.backend import InMemoryBackend
from leathercraft_hq.config import load_settings
from leathercraft_hq.logging_config import setup_logging
from leathercraft_hq.metrics import DashboardStats
from leathercraft_hq.session import create_dashboard
from supabase_service import SupabaseBackend, get_supabase_client

logger = logging.getLogger(__name__)

SETTINGS = None
DASHBOARD = None
_lock = threading.Lock()


# ══════════════════════════════════════════════════════════════════════════════
#  UTILITY FUNCTIONS
# ══════════════════════════════════════════════════════════════════════════════

def money(val, currency=None):
    """Format a number as 1,234.50 MAD (convenience for templates)."""
    currency = currency or (SETTINGS.currency if SETTINGS else "MAD")
    val = float(val or 0)
    if val < 0:
        return f"-{abs(val):,.2f} {currency}"
    return f"{val:,.2f} {currency}"


def _make_backend(settings):
    client = get_supabase_client(settings)
    if client is None:
        print("  Supabase not configured (SUPABASE_URL / SUPABASE_KEY), using in-memory data")
        return InMemoryBackend()
    return SupabaseBackend(client, settings)


# ══════════════════════════════════════════════════════════════════════════════
#  LIFECYCLE
# ══════════════════════════════════════════════════════════════════════════════

def start(settings=None, service=None):
    """Open the dashboard session once per process."""
    global SETTINGS, DASHBOARD
    with _lock:
        if DASHBOARD is not None:
            return DASHBOARD
        SETTINGS = settings or load_settings()
        setup_logging(SETTINGS.log_level)
        DASHBOARD = create_dashboard(service or _make_backend(SETTINGS))
    DASHBOARD.session.open()
    return DASHBOARD


def stop():
    """Release every live listener (gunicorn worker_exit, tests)."""
    global DASHBOARD
    with _lock:
        dashboard, DASHBOARD = DASHBOARD, None
    if dashboard is None:
        return
    dashboard.session.close()
    close = getattr(dashboard.service, "close", None)
    if close is not None:
        close()
    logger.info("Dashboard session stopped")


def refresh(collection=None):
    if DASHBOARD is not None:
        DASHBOARD.session.refresh(collection)


# ══════════════════════════════════════════════════════════════════════════════
#  ACCESSORS
# ══════════════════════════════════════════════════════════════════════════════

def version() -> int:
    return DASHBOARD.coordinator.version if DASHBOARD else 0


def gateway():
    return DASHBOARD.gateway if DASHBOARD else None


def orders() -> tuple:
    return DASHBOARD.store.orders if DASHBOARD else ()


def products() -> tuple:
    return DASHBOARD.store.products if DASHBOARD else ()


def inventory() -> tuple:
    return DASHBOARD.store.inventory if DASHBOARD else ()


def expenses() -> tuple:
    return DASHBOARD.store.expenses if DASHBOARD else ()


def stats() -> DashboardStats:
    return DASHBOARD.coordinator.stats if DASHBOARD else DashboardStats()


def session_error():
    return DASHBOARD.coordinator.session_error if DASHBOARD else None


def collection_errors() -> dict:
    return dict(DASHBOARD.coordinator.collection_errors) if DASHBOARD else {}


def synthesizer_error():
    return DASHBOARD.coordinator.synthesizer_error if DASHBOARD else None


def is_loading() -> bool:
    return DASHBOARD.coordinator.is_loading if DASHBOARD else True


def is_read_only(collection, record_id) -> bool:
    return bool(DASHBOARD and DASHBOARD.gateway.is_read_only(collection, record_id))


def get(collection, record_id):
    if not DASHBOARD or not record_id:
        return None
    return DASHBOARD.store.get(collection, record_id)
