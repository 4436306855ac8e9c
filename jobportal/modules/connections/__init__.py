from .normalize import Tab, RelationKind, RelationRecord, normalize
from .filtering import filter_records
from .reconciler import (
    ConnectionReconciler,
    Relationship,
    Direction,
    RelationshipState,
    is_duplicate_request
)

__all__ = [
    'Tab',
    'RelationKind',
    'RelationRecord',
    'normalize',
    'filter_records',
    'ConnectionReconciler',
    'Relationship',
    'Direction',
    'RelationshipState',
    'is_duplicate_request'
]
