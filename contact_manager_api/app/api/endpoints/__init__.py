"""
Endpoint subpackage.

Each module in this package defines an APIRouter for one concern.  The
routers are aggregated in ``router.py`` at the package level.
"""
