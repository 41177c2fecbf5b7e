"""Host adapters that drive the mode manager from a UI toolkit."""
