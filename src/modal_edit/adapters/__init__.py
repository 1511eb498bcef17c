"""Host adapters that drive the editor core."""
