"""Host adapters that bind history stores to UI toolkits."""
