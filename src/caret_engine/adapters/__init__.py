"""Host adapters for the editor engine."""
