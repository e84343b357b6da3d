"""
Garden Analytics API
====================

Time-series analytics endpoints for garden environmental metrics.
Designed for dashboard charts and data visualization.

Routes:
- GET  /api/analytics/gardens/<garden_id>/series - Daily mean series per metric
- GET  /api/analytics/gardens/<garden_id>/statistics - Period statistics per metric
- POST /api/analytics/gardens/<garden_id>/metrics - Record metric readings

Empty windows are served from synthetic demo data (flagged ``synthetic``).
"""
import logging
from flask import Blueprint

logger = logging.getLogger(__name__)

# Create the blueprint
analytics_api = Blueprint('analytics_api', __name__, url_prefix='/api/analytics')

# Import routes after blueprint creation to avoid circular imports
from app.blueprints.api.analytics import metrics  # noqa: F401, E402

__all__ = ['analytics_api']
