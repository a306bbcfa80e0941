"""DataStore implementations."""

from .memory_data_store import MemoryDataStore
from .supabase_data_store import SupabaseDataStore

__all__ = ["MemoryDataStore", "SupabaseDataStore"]
