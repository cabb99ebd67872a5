"""
Endpoint subpackage.

Each module in this package defines an APIRouter for one concern
(consultants, catalogs, statistics, health).  The routers are
aggregated in ``api/router.py`` and included in the main application.
"""
