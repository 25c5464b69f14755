# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Sans cet import, les FK comme classes.created_by → profiles.id échouent
# avec NoReferencedTableError si profile.py n'est pas chargé avant school_class.py.

from cncclass.models.profile import Profile  # noqa: F401  — doit précéder school_class
from cncclass.models.school_class import SchoolClass, ClassParticipant  # noqa: F401
from cncclass.models.assignment import Assignment  # noqa: F401
from cncclass.models.student_response import StudentResponse  # noqa: F401
