"""Engine module exports."""

from ifbsync.engine.engine import SyncEngine
from ifbsync.engine.pages import PageResolver
from ifbsync.engine.progress import NullSyncProgress, Phase, SyncProgress
from ifbsync.engine.reconcile import compute_field_intersection, plan_mutations
from ifbsync.engine.schema import normalize_name

__all__ = [
    "NullSyncProgress",
    "PageResolver",
    "Phase",
    "SyncEngine",
    "SyncProgress",
    "compute_field_intersection",
    "normalize_name",
    "plan_mutations",
]
