from .in_memory_record_store import InMemoryRecordStore
from .supabase_record_store import SupabaseRecordStore

__all__ = [
    "InMemoryRecordStore",
    "SupabaseRecordStore",
]
