from .errors import LoaderError
from .file_spec import EventStreamFileSpec, RecordedEventSpec, VariableStoreFileSpec
from .store_loader import load_event_stream, load_variable_store

__all__ = [
    "load_variable_store",
    "load_event_stream",
    "LoaderError",
    "VariableStoreFileSpec",
    "EventStreamFileSpec",
    "RecordedEventSpec",
]
