"""Lenses, reactive state, event loops, contexts and stores for unidirectional data flow."""

__version__ = "0.1.0"

__all__ = ["lenses", "event_loops", "state", "context", "store", "snake"]