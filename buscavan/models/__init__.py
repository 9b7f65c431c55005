# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Sans cet import, les FK comme trips.vehicle_id → vehicles.id échouent
# avec NoReferencedTableError si vehicle.py n'est pas chargé avant trip.py.

from buscavan.models.user import User  # noqa: F401  — doit précéder vehicle et trip
from buscavan.models.city import City  # noqa: F401
from buscavan.models.vehicle import Vehicle  # noqa: F401
from buscavan.models.trip import Trip  # noqa: F401
from buscavan.models.comment import Comment  # noqa: F401
