"""Year × month temperature matrix with embedded daily trend lines."""
